"""Tests for the tracer module."""

import json

import numpy as np
import pytest
from shapely.geometry import LineString, MultiLineString, Point


@pytest.fixture(autouse=True)
def reset_tracer():
    yield
    from tacdraw.tracer import configure_tracer
    configure_tracer(enabled=False)


class TestSummarize:
    """Tests for object summarization."""

    def test_geometry_summary(self):
        """Test that geometries report type, part count and bounds."""
        from tacdraw.tracer import summarize

        summary = summarize(MultiLineString([[(0, 0), (1, 0)], [(0, 2), (4, 2)]]))

        assert summary.startswith("MultiLineString(parts=2")
        assert "bounds=[0.0,0.0,4.0,2.0]" in summary

    def test_empty_geometry_summary(self):
        """Test that empty geometries are flagged."""
        from tacdraw.tracer import summarize

        assert summarize(Point()) == "Point(empty)"

    def test_segment_summary(self):
        """Test that segments show both ends and the bearing."""
        from tacdraw.geometry.kernel import Segment
        from tacdraw.tracer import summarize

        summary = summarize(Segment((0, 0), (0, 5)))

        assert "(0.00,0.00)->(0.00,5.00)" in summary
        assert "angle=1.571" in summary

    def test_primitive_summaries(self):
        """Test stroke and label summaries."""
        from tacdraw.models import Label, Stroke
        from tacdraw.tracer import summarize

        stroke = Stroke(geometry=LineString([(0, 0), (3, 4)]), dashed=True)
        label = Label(anchor=(1.0, 2.0), text="C", rotation=0.5)

        assert summarize(stroke).startswith("Stroke(dashed=True,LineString")
        assert summarize(label) == "Label('C'@(1.00,2.00),rot=0.500)"

    def test_numpy_array_summary(self):
        """Test that numpy arrays are summarized with shape and type."""
        from tacdraw.tracer import summarize

        summary = summarize(np.zeros((5, 2)))

        assert summary == "ndarray(float64,5x2)"

    def test_list_summary(self):
        """Test that lists report length and element types."""
        from tacdraw.models import Label
        from tacdraw.tracer import summarize

        summary = summarize([Label(anchor=(0.0, 0.0), text="B"), 3])

        assert summary == "list(len=2,types=Label|int)"

    def test_summary_capped_length(self):
        """Test that summary never exceeds max length."""
        from tacdraw.tracer import summarize

        large_dict = {f"key_{i}": f"value_{i}" for i in range(100)}

        assert len(summarize(large_dict, max_len=20)) <= 20

    def test_string_summary(self):
        """Test long string summarization."""
        from tacdraw.tracer import summarize

        assert summarize("a" * 1000) == "str(len=1000)"
        assert summarize("G*T*X-----") == "'G*T*X-----'"

    def test_none_summary(self):
        """Test None summarization."""
        from tacdraw.tracer import summarize

        assert summarize(None) == "None"


class TestTracerSpan:
    """Tests for tracer span functionality."""

    def test_span_nesting(self, capsys):
        """Test that nested spans indent and report start and end."""
        from tacdraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with tracer.span("outer", module="test"):
            with tracer.span("inner", module="test"):
                tracer.event("inside")

        lines = capsys.readouterr().err.strip().split("\n")

        assert len(lines) == 5
        assert "test:outer  start" in lines[0]
        assert "  test:inner  start" in lines[1]
        assert "inside" in lines[2]
        assert "end ok" in lines[4]

    def test_span_reports_failure(self, capsys):
        """Test that a failing span logs at ERROR and re-raises."""
        from tacdraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")

        with pytest.raises(RuntimeError):
            with get_tracer().span("boom", module="test"):
                raise RuntimeError("bad")

        err = capsys.readouterr().err
        assert "ERROR" in err
        assert "RuntimeError: bad" in err

    def test_level_filters_debug(self, capsys):
        """Test that DEBUG events are hidden at INFO."""
        from tacdraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        get_tracer().event("hidden", level="DEBUG")

        assert capsys.readouterr().err == ""

    def test_json_output(self, capsys):
        """Test that JSON mode adds a parseable record per line."""
        from tacdraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO", json_output=True)
        get_tracer().event("hello", width=4)

        lines = capsys.readouterr().err.strip().split("\n")
        record = json.loads(lines[1])

        assert record["message"] == "hello width=4"
        assert record["meta"] == {"width": "4"}

    def test_file_output(self, tmp_path, capsys):
        """Test that trace lines are mirrored to a file."""
        from tacdraw.tracer import configure_tracer, get_tracer

        trace_file = tmp_path / "trace.log"
        configure_tracer(enabled=True, level="INFO", file_path=str(trace_file))
        get_tracer().event("to file")
        configure_tracer(enabled=False)

        assert "to file" in trace_file.read_text(encoding="utf-8")

    def test_spans_are_per_thread(self, capsys):
        """Test that a span open in one thread does not nest events of another."""
        import threading

        from tacdraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO", json_output=True)
        tracer = get_tracer()

        with tracer.span("outer", module="test"):
            worker = threading.Thread(target=tracer.event, args=("from worker",))
            worker.start()
            worker.join()
            tracer.event("from main")

        records = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
        by_message = {r["message"]: r for r in records}

        assert by_message["from worker"]["depth"] == 0
        assert by_message["from worker"]["function"] == ""
        assert by_message["from main"]["depth"] == 1
        assert by_message["from main"]["function"] == "outer"

    def test_tracer_disabled_no_output(self, capsys):
        """Test that disabled tracer produces no output."""
        from tacdraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=False)
        tracer = get_tracer()

        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        assert capsys.readouterr().err == ""


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        """Test that decorated function executes normally."""
        from tacdraw.tracer import trace

        @trace(label="double")
        def double(x):
            return x * 2

        assert double(5) == 10

    def test_decorator_with_exception(self):
        """Test that decorator lets exceptions through."""
        from tacdraw.tracer import trace

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            failing_func()

    def test_decorator_summarizes_named_arguments(self, capsys):
        """Test that arg_names are summarized whether positional or keyword."""
        from tacdraw.tracer import configure_tracer, trace

        configure_tracer(enabled=True, level="INFO")

        @trace(label="build", arg_names=["identifier", "width"])
        def build(identifier, line, width):
            return identifier

        build("G*T*X-----", None, width=4)

        err = capsys.readouterr().err
        assert "build  start identifier='G*T*X-----' width=4" in err

    def test_synthesize_is_traced(self, capsys, short_axis):
        """Test that synthesis opens a span when tracing is on."""
        from tacdraw.synthesis import synthesize
        from tacdraw.tracer import configure_tracer

        configure_tracer(enabled=True, level="INFO")
        synthesize("G*T*X-----", short_axis, 4, 1)

        err = capsys.readouterr().err
        assert "synthesis:synthesize  start" in err
        assert "end ok" in err
