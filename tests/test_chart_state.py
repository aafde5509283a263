from riskviz_desktop.chart_state import (
    EMPTY,
    ERROR,
    FETCH_ERROR_MESSAGE,
    LOADING,
    NO_DATA_MESSAGE,
    READY,
    MetricChartState,
)

ROWS = [
    {"Hotspot": "HS1", "Metric": "A", "Score": "4"},
    {"Hotspot": "HS1", "Metric": "A", "Score": "6"},
    {"Hotspot": "HS2", "Metric": "B", "Score": "2"},
]


class Recorder:
    def __init__(self):
        self.fetches = 0
        self.renders = []

    def start_fetch(self):
        self.fetches += 1

    def listener(self, state):
        self.renders.append(state.status)


def make_state(hotspot="HS1"):
    recorder = Recorder()
    state = MetricChartState(recorder.start_fetch, hotspot=hotspot, listener=recorder.listener)
    return state, recorder


def test_mount_without_data_fetches():
    state, recorder = make_state()
    state.mount()

    assert recorder.fetches == 1
    assert state.status == LOADING
    assert state.placeholder_text == "Loading metric score data..."


def test_successful_fetch_renders_points():
    state, recorder = make_state()
    state.mount()
    state.fetch_succeeded(ROWS)

    assert state.status == READY
    assert [(p.metric, p.score) for p in state.chart_data] == [("A", 5.0)]
    assert recorder.renders[-1] == READY


def test_empty_backend_is_an_error():
    state, _ = make_state()
    state.mount()
    state.fetch_succeeded([])

    assert state.status == ERROR
    assert state.placeholder_text == NO_DATA_MESSAGE


def test_failed_fetch_and_retry():
    state, recorder = make_state()
    state.mount()
    state.fetch_failed("connection refused")

    assert state.status == ERROR
    assert state.error == FETCH_ERROR_MESSAGE

    state.refresh()

    assert recorder.fetches == 2
    assert state.status == LOADING
    assert state.error is None


def test_no_rows_for_hotspot_is_empty():
    state, _ = make_state(hotspot="HS7")
    state.mount()
    state.fetch_succeeded(ROWS)

    assert state.status == EMPTY
    assert state.placeholder_text == "No metric score data available for HS7"


def test_local_rows_win_over_fetching():
    state, recorder = make_state()
    state.set_local_rows(ROWS)

    assert recorder.fetches == 0
    assert state.status == READY


def test_upload_id_change_triggers_fetch():
    state, recorder = make_state()
    state.set_local_rows(ROWS)

    state.set_upload_id(1)
    state.set_upload_id(1)
    state.set_upload_id(2)

    assert recorder.fetches == 2


def test_switching_hotspot_reuses_fetched_rows():
    state, recorder = make_state()
    state.mount()
    state.fetch_succeeded(ROWS)
    state.set_hotspot("HS2")

    assert recorder.fetches == 1
    assert [(p.metric, p.score) for p in state.chart_data] == [("B", 2.0)]


def test_late_response_overwrites_newer_one():
    state, recorder = make_state()
    state.refresh()
    state.refresh()
    state.fetch_succeeded(ROWS)
    state.fetch_succeeded([{"Hotspot": "HS1", "Metric": "Z", "Score": "1"}])

    assert recorder.fetches == 2
    assert [p.metric for p in state.chart_data] == ["Z"]
