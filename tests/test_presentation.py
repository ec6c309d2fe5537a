from packages.core.awake.presentation import PRESENTATION, PresentationAdapter


class FakeView:
    def __init__(self):
        self.icon = None
        self.tooltip = None
        self.errors = []
        self.quit_calls = 0

    def set_icon(self, icon):
        self.icon = icon

    def set_tooltip(self, text):
        self.tooltip = text

    def show_error(self, message, fatal):
        self.errors.append((message, fatal))

    def quit(self):
        self.quit_calls += 1


def test_table_covers_every_mode():
    assert PRESENTATION == {
        "INACTIVE": ("sleeping_white", "Caffeinated: sleep allowed"),
        "ACTIVE_TIMED": ("awake_white", "Caffeinated: sleep not allowed!"),
        "ACTIVE_INDEFINITE": ("awake_white", "Caffeinated: sleep not allowed!"),
        "AUTO_ACTIVE": ("awake_blue", "Caffeinated: (auto) sleep not allowed!"),
        "AUTO_IDLE": ("sleeping_blue", "Caffeinated: (auto) sleep allowed"),
    }


def test_scenario_click_then_countdown(make_harness):
    h = make_harness(default_duration=15)
    view = FakeView()
    adapter = PresentationAdapter(h.machine, view)

    h.machine.start(activate_at_launch=False)
    assert view.icon == "sleeping_white"

    adapter.on_primary_click()
    assert h.machine.current_mode() == "ACTIVE_TIMED"
    assert view.icon == "awake_white"
    assert view.tooltip == "Caffeinated: sleep not allowed!"

    h.countdown.fire()
    assert view.icon == "sleeping_white"
    assert view.tooltip == "Caffeinated: sleep allowed"


def test_auto_selection_shows_blue_icons(make_harness):
    h = make_harness()
    view = FakeView()
    adapter = PresentationAdapter(h.machine, view)
    h.processes.running = {"notepad"}

    adapter.on_duration_selected(-1)
    assert view.icon == "awake_blue"

    h.processes.running = set()
    h.poll.fire()
    assert view.icon == "sleeping_blue"
    assert view.tooltip == "Caffeinated: (auto) sleep allowed"


def test_fatal_error_is_shown_then_view_quits(make_harness):
    h = make_harness()
    view = FakeView()
    adapter = PresentationAdapter(h.machine, view)
    h.power.fail_request = True

    adapter.on_duration_selected(15)

    assert len(view.errors) == 1 and view.errors[0][1] is True
    assert view.quit_calls == 1
    assert view.icon is None


def test_exit_menu_quits(make_harness):
    h = make_harness()
    view = FakeView()
    adapter = PresentationAdapter(h.machine, view)
    adapter.on_duration_selected(0)

    adapter.on_exit_selected()

    assert view.icon == "sleeping_white"
    assert view.quit_calls == 1
    assert h.power.calls[-1] == "release"
