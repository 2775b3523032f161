from __future__ import annotations

import datetime as dt
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from dayplan.model import EventKind, RepeatFrequency
from dayplan.normalize import EventLoadError, event_from_dict, events_from_obj, load_events


class TestEventFromDictContract(unittest.TestCase):
    def test_snake_case_record(self) -> None:
        e = event_from_dict(
            {
                "id": "e1",
                "title": "Standup",
                "date": "2025-09-02",
                "start_time": "09:00",
                "end_time": "09:15",
                "repeat": "weekly",
                "kind": "task",
            }
        )
        self.assertIsNotNone(e)
        self.assertEqual(e.date, dt.date(2025, 9, 2))
        self.assertEqual(e.start_time, dt.time(9, 0))
        self.assertEqual(e.end_time, dt.time(9, 15))
        self.assertIs(e.repeat, RepeatFrequency.WEEKLY)
        self.assertIs(e.kind, EventKind.TASK)
        self.assertTrue(e.has_time_range)
        self.assertEqual(e.category, "General")

    def test_stored_camel_case_record(self) -> None:
        e = event_from_dict(
            {
                "id": "e2",
                "date": "2025-09-02T00:00:00.000",
                "startTime": {"hour": 13, "minute": 30},
                "endTime": {"hour": 14, "minute": 0},
                "repeatFrequency": "monthly",
                "type": "timeOff",
                "isCompleted": True,
            }
        )
        self.assertEqual(e.date, dt.date(2025, 9, 2))
        self.assertEqual(e.start_time, dt.time(13, 30))
        self.assertIs(e.repeat, RepeatFrequency.MONTHLY)
        self.assertIs(e.kind, EventKind.TIME_OFF)
        self.assertEqual(e.kind.label, "Time Off")
        self.assertTrue(e.blocks_time)
        self.assertTrue(e.is_completed)

    def test_unknown_names_fall_back(self) -> None:
        e = event_from_dict({"date": "2025-09-02", "repeat": "yearly", "kind": "meeting"})
        self.assertIs(e.repeat, RepeatFrequency.NONE)
        self.assertIs(e.kind, EventKind.EVENT)
        self.assertEqual(e.repeat.label, "Does not repeat")

    def test_bad_time_is_dropped(self) -> None:
        e = event_from_dict({"date": "2025-09-02", "start_time": "25:00", "end_time": {"hour": 10, "minute": 0}})
        self.assertIsNone(e.start_time)
        self.assertEqual(e.end_time, dt.time(10, 0))
        self.assertFalse(e.has_time_range)

    def test_missing_date_is_skipped(self) -> None:
        self.assertIsNone(event_from_dict({"title": "x"}))
        self.assertIsNone(event_from_dict({"date": "not a date"}))
        self.assertIsNone(event_from_dict("2025-09-02"))  # type: ignore[arg-type]


class TestNormalizeObservabilityContract(unittest.TestCase):
    def test_invalid_time_logs_warning_when_obs_enabled(self) -> None:
        with patch.dict(os.environ, {"DAYPLAN_OBS_LOG": "1"}, clear=False), patch("dayplan.normalize.eprint") as ep:
            out = event_from_dict({"id": "e1", "date": "2025-09-02", "start_time": "9am"})
        self.assertIsNotNone(out)
        combined = "\n".join(str(c.args[0]) for c in ep.call_args_list if c.args)
        self.assertIn("[dayplan.normalize] WARN: invalid start time", combined)

    def test_skipped_record_logs_when_obs_enabled(self) -> None:
        with patch.dict(os.environ, {"DAYPLAN_OBS_LOG": "yes"}, clear=False), patch("dayplan.normalize.eprint") as ep:
            self.assertIsNone(event_from_dict({"id": "e9"}))
        self.assertTrue(ep.called)

    def test_no_log_when_obs_disabled(self) -> None:
        with patch.dict(os.environ, {}, clear=True), patch("dayplan.normalize.eprint") as ep:
            event_from_dict({"id": "e1", "date": "2025-09-02", "start_time": "9am"})
        self.assertFalse(ep.called)


class TestLoadEventsContract(unittest.TestCase):
    def test_list_and_wrapped_shapes(self) -> None:
        rows = [{"date": "2025-09-02"}, {"title": "no date"}, {"date": "2025-09-03"}]
        self.assertEqual(len(events_from_obj(rows)), 2)
        self.assertEqual(len(events_from_obj({"events": rows})), 2)

    def test_bad_top_level_raises(self) -> None:
        with self.assertRaises(EventLoadError):
            events_from_obj({"tasks": []})
        with self.assertRaises(ValueError):
            events_from_obj("nope")

    def test_load_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "events.json"
            p.write_text(json.dumps({"events": [{"date": "2025-09-02", "title": "x"}]}), encoding="utf-8")
            got = load_events(p)
        self.assertEqual([e.title for e in got], ["x"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
