"""
Session recorder for raw sensor samples and heading updates.

Records every sensor event and every accepted heading update as JSON Lines so
a session can be analysed offline or replayed through MockSensorSource.

Files (inside the session directory):
- samples.jsonl: {"timestamp", "kind", "values"} per sensor event (replay format)
- headings.jsonl: one HeadingUpdate per accepted pipeline cycle

Usage:
    recorder = SampleRecorder(output_dir=Path("logs"))
    observer.add_update_listener(recorder.log_heading)
    source.start(recorder.wrap(observer.on_sensor_changed))
    summary = recorder.finalize_session()
"""

import json
import logging
import threading
import time
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from compass.core.heading.heading_estimator import HeadingUpdate
from compass.utils.config import Config

log = logging.getLogger(__name__)


class SampleRecorder:
    """Thread-safe JSONL recorder for one session."""

    def __init__(self, output_dir: Optional[Path] = None, session_dir: Optional[Path] = None):
        """
        Args:
            output_dir: Base directory for sessions (default: Config.LOG_DIR)
            session_dir: Exact directory to use instead of a new timestamped one
        """
        self._write_lock = threading.Lock()
        self._count_lock = threading.Lock()

        self.session_timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        self.session_start = time.time()

        if session_dir is None:
            base_dir = Path(output_dir if output_dir is not None else Config.LOG_DIR)
            session_dir = base_dir / f"{Config.LOG_SESSION_PREFIX}{self.session_timestamp}"
        self.session_dir = Path(session_dir)
        self.session_dir.mkdir(parents=True, exist_ok=True)

        self.samples_log = self.session_dir / "samples.jsonl"
        self.headings_log = self.session_dir / "headings.jsonl"

        self.sample_counts: Dict[str, int] = {}
        self.heading_count = 0
        self.text_changes = 0

        log.info("[RECORDER] New session: %s", self.session_dir)

    def get_session_dir(self) -> Path:
        """Return the session directory path for use by other loggers."""
        return self.session_dir

    def log_sample(self, event: Any) -> None:
        """
        Record one raw sensor event.

        Thread-safe: Can be called from any thread.
        """
        kind = getattr(event.kind, "value", event.kind)
        data = {
            "timestamp": float(event.timestamp),
            "kind": str(kind),
            "values": [float(v) for v in event.values],
        }
        with self._count_lock:
            self.sample_counts[data["kind"]] = self.sample_counts.get(data["kind"], 0) + 1
        self._write_jsonl(self.samples_log, data)

    def log_heading(self, update: HeadingUpdate) -> None:
        """
        Record one accepted heading update.

        Thread-safe: Can be called from any thread.
        """
        with self._count_lock:
            self.heading_count += 1
            if update.text is not None:
                self.text_changes += 1
        self._write_jsonl(self.headings_log, asdict(update))

    def wrap(self, sink: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """Return a sink that records each event the wrapped sink accepts."""
        def recording_sink(event):
            result = sink(event)
            self.log_sample(event)
            return result
        return recording_sink

    def finalize_session(self) -> Dict[str, Any]:
        """Write and return the session summary."""
        with self._count_lock:
            summary = {
                "session": self.session_timestamp,
                "duration_s": time.time() - self.session_start,
                "samples": dict(self.sample_counts),
                "heading_updates": self.heading_count,
                "text_changes": self.text_changes,
            }

        summary_path = self.session_dir / "summary.json"
        with self._write_lock:
            with open(summary_path, 'w', encoding='utf-8') as f:
                json.dump(summary, f, indent=2, ensure_ascii=False)

        log.info("[RECORDER] Session summary written to %s", summary_path)
        return summary

    def _write_jsonl(self, path: Path, data: Dict[str, Any]) -> None:
        """
        Write JSON line thread-safely.
        """
        try:
            line = json.dumps(data, ensure_ascii=False)
        except TypeError:
            line = json.dumps({"error": "serialization_failed", "repr": repr(data)})

        with self._write_lock:
            with open(path, 'a', encoding='utf-8') as f:
                f.write(line + '\n')
