from __future__ import annotations

import json

from telemetry.logger import TelemetryLogger, read_records


def test_logger_appends_jsonl(tmp_path) -> None:
    path = tmp_path / "telemetry.jsonl"
    logger = TelemetryLogger(str(path))
    logger.log_step({"score": 1, "t": 5.0})
    logger.log_step({"score": 2})
    logger.close()
    logger.close()
    # Writes after close are dropped
    logger.log_step({"score": 3})
    logger.log_episode(0, 3, 10)

    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [r["score"] for r in records] == [1, 2]
    assert all(r["kind"] == "step" for r in records)
    assert records[0]["t"] == 5.0
    assert "t" in records[1]
    assert logger.records_written == 2
    assert logger.episodes_logged == 0

    with TelemetryLogger(str(path)) as again:
        again.log_step({"score": 4})
    assert len(path.read_text(encoding="utf-8").splitlines()) == 3


def test_episode_summaries_track_best_score(tmp_path) -> None:
    path = tmp_path / "runs" / "episodes.jsonl"
    with TelemetryLogger(str(path)) as logger:
        assert logger.best_score is None
        logger.log_step({"episode": 0, "step": 1, "score": 0})
        logger.log_episode(0, 40, 57)
        logger.log_episode(1, -3, 12)

    assert logger.episodes_logged == 2
    assert logger.best_score == 40
    assert logger.records_written == 3

    episodes = list(read_records(str(path), kind="episode"))
    assert [(e["episode"], e["score"], e["steps"]) for e in episodes] == [(0, 40, 57), (1, -3, 12)]
    assert len(list(read_records(str(path)))) == 3
    assert [r["step"] for r in read_records(str(path), kind="step")] == [1]
