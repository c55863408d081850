import os
import re

from devkit.timezone import SAST_ZONE_NAME, configure_sast_timezone, now_sast, now_sast_iso


def test_now_sast_is_second_precision_at_plus_two() -> None:
    stamp = now_sast_iso()

    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\+02:00", stamp)
    assert now_sast().microsecond == 0


def test_configure_sast_timezone_sets_process_zone(monkeypatch) -> None:
    monkeypatch.setenv("TZ", "UTC")
    configure_sast_timezone()
    assert os.environ["TZ"] == SAST_ZONE_NAME
