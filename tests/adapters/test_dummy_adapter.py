from twentyone.adapters import DummyAdapter, TableAdapter
from twentyone.events import EngineEventType


def test_dummy_adapter_is_a_table_adapter():
    assert isinstance(DummyAdapter(), TableAdapter)


def test_records_events(adapter):
    adapter.notify_game_event(EngineEventType.TURN_CHANGED, {"player": "Ana"})
    adapter.notify_game_event("CUSTOM", {"x": 1})

    assert adapter.event_types() == ["TURN_CHANGED", "CUSTOM"]
    assert adapter.get_events_by_type(EngineEventType.TURN_CHANGED) == [
        {"player": "Ana"}
    ]
    assert adapter.get_events_by_type("CUSTOM") == [{"x": 1}]


def test_records_states_and_clears(stacked_engine, adapter):
    engine = stacked_engine(["Ana"], ["10", "10", "9", "8"])
    engine.start_round()

    assert adapter.last_state.current_player.name == "Ana"
    assert adapter.events

    adapter.clear()
    assert adapter.events == []
    assert adapter.rendered_states == []


def test_verbose_prints(stacked_engine, capsys):
    verbose = DummyAdapter(verbose=True)
    engine = stacked_engine(["Ana"], ["10", "10", "9", "8"])
    engine.attach_adapter(verbose)
    engine.start_round()

    out = capsys.readouterr().out
    assert "Event: ROUND_STARTED" in out
    assert "Ana: ['10♥', '9♣'] - 19" in out
