from fitdesk.utils.formatting import format_duration, format_time, pluralize, progress_bar


def test_format_time() -> None:
    assert format_time(45) == "45s"
    assert format_time(60) == "1:00"
    assert format_time(125) == "2:05"
    assert format_time(-3) == "0s"


def test_format_duration() -> None:
    assert format_duration(30) == "30s"
    assert format_duration(150) == "2m 30s"


def test_progress_bar() -> None:
    assert progress_bar(0) == "░" * 20
    assert progress_bar(100) == "█" * 20
    assert progress_bar(37) == "█" * 7 + "░" * 13
    assert len(progress_bar(250)) == 20


def test_pluralize() -> None:
    assert pluralize(1, "day") == "1 day"
    assert pluralize(3, "day") == "3 days"
    assert pluralize(0, "exercise") == "0 exercises"
