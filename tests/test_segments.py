from minibar.segments import SegmentContext, format_segments, placeholders


def test_format_segments_joins_rendered_parts():
    providers = {"mode": lambda: "Python", "encoding": lambda: "utf-8", "clock": lambda: "09:05"}

    assert format_segments(["{mode}", "[{encoding}]", "{clock}"], providers) == "Python [utf-8] 09:05"


def test_empty_segments_are_skipped():
    providers = {"mode": lambda: "", "clock": lambda: "09:05"}

    assert format_segments(["[{mode}]", "{clock}"], providers) == "09:05"


def test_unknown_placeholder_renders_empty():
    assert format_segments(["<{nothing}>", "plain"], {}) == "plain"


def test_malformed_segment_is_skipped(caplog):
    providers = {"clock": lambda: "09:05"}

    assert format_segments(["{clock", "{clock}"], providers) == "09:05"
    assert "Malformed status segment" in caplog.text


def test_providers_called_once_per_render():
    calls = []

    def mode():
        calls.append(1)
        return "Text"

    assert format_segments(["{mode}", "({mode})"], {"mode": mode}, separator="|") == "Text|(Text)"
    assert len(calls) == 1


def test_segment_context_converts_values():
    context = SegmentContext({"line": lambda: 12, "none": lambda: None})

    assert context["line"] == "12"
    assert context["none"] == ""


def test_placeholders():
    assert placeholders("[{encoding}] {position}") == ["encoding", "position"]
    assert placeholders("literal") == []
