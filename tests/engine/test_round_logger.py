import json
import logging

from twentyone.engine.round_logger import RoundLogger


def play_round(round_logger, number, outcomes, dealer_total=19, reshuffle=False):
    round_logger.log_round_start(number, list(outcomes))
    for name in outcomes:
        round_logger.log_action(name, "hit", 12, 18, "6♥")
        round_logger.log_action(name, "stand", 18, 18)
    if reshuffle:
        round_logger.log_reshuffle()
    round_logger.log_action("Dealer", "hit", 15, dealer_total, "4♠")
    round_logger.log_round_end(outcomes, dealer_total)


def test_round_history():
    round_logger = RoundLogger("twentyone.rounds.history")
    play_round(round_logger, 1, {"Ana": "win", "Bruno": "lose"})

    assert round_logger.current_round is None
    assert len(round_logger.history) == 1
    record = round_logger.history[0]
    assert record.players == ["Ana", "Bruno"]
    assert len(record.actions) == 5
    assert record.actions[0].card == "6♥"
    assert record.actions[1].card is None
    assert record.outcomes == {"Ana": "win", "Bruno": "lose"}
    assert record.dealer_total == 19


def test_actions_outside_a_round_are_dropped():
    round_logger = RoundLogger("twentyone.rounds.idle")
    round_logger.log_action("Ana", "hit", 10, 15, "5♣")
    round_logger.log_reshuffle()
    round_logger.log_round_end({}, 0)
    assert round_logger.history == []


def test_get_summary():
    round_logger = RoundLogger("twentyone.rounds.summary")
    play_round(round_logger, 1, {"Ana": "win", "Bruno": "lose"})
    play_round(round_logger, 2, {"Ana": "push", "Bruno": "lose"}, reshuffle=True)

    summary = round_logger.get_summary()
    assert summary["rounds"] == 2
    assert summary["by_action"] == {"hit": 6, "stand": 4}
    assert summary["by_outcome"] == {"win": 1, "lose": 2, "push": 1}
    assert summary["reshuffles"] == 1


def test_export_history(tmp_path):
    round_logger = RoundLogger("twentyone.rounds.export")
    play_round(round_logger, 1, {"Ana": "win"})
    path = tmp_path / "history.json"

    round_logger.export_history(str(path))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["summary"]["rounds"] == 1
    assert data["rounds"][0]["round"] == 1
    assert data["rounds"][0]["outcomes"] == {"Ana": "win"}
    assert data["rounds"][0]["actions"][0]["participant"] == "Ana"


def test_disable_logging_env(monkeypatch):
    monkeypatch.setenv("TWENTYONE_DISABLE_LOGGING", "true")
    round_logger = RoundLogger("twentyone.rounds.quiet", log_level=logging.DEBUG)
    assert round_logger.logger.level == logging.ERROR


def test_log_messages(caplog):
    round_logger = RoundLogger("twentyone.rounds.messages", log_level=logging.DEBUG)
    with caplog.at_level(logging.DEBUG, logger="twentyone.rounds.messages"):
        play_round(round_logger, 3, {"Ana": "win"})
        round_logger.log_ignored("Bruno", "hit", "not the current player")

    text = caplog.text
    assert "=== Round 3 starting" in text
    assert "Ana hit: 6♥ (12 -> 18)" in text
    assert "Ana: win" in text
    assert "Ignored hit from Bruno" in text


def test_level_is_inherited_by_default(monkeypatch):
    monkeypatch.delenv("TWENTYONE_DISABLE_LOGGING", raising=False)
    round_logger = RoundLogger("twentyone.rounds.inherit")
    assert round_logger.logger.level == logging.NOTSET
