"""Unit tests for DiagnosticSink (domain/sink.py)."""

import threading
import unittest

from buildfile_linter.domain.entities import (
    DedupStrategy,
    Diagnostic,
    Position,
    Severity,
    SourceRange,
)
from buildfile_linter.domain.sink import DiagnosticSink


def _diag(code: str, location: object, message: str = "msg") -> Diagnostic:
    return Diagnostic(
        rule_code=code, rule_name=f"Rule{code}", message=message, location=location)


class TestDiagnosticSinkRecord(unittest.TestCase):
    """Tests for recording and deduplication."""

    def test_new_sink_is_empty(self) -> None:
        """Test that a fresh sink holds nothing."""
        sink = DiagnosticSink()
        self.assertTrue(sink.is_empty())
        self.assertEqual(sink.count(), 0)
        self.assertEqual(sink.results(), ())

    def test_identical_triple_is_recorded_once(self) -> None:
        """Test that an identical diagnostic is recorded once."""
        sink = DiagnosticSink()
        location = SourceRange.at(3)
        self.assertTrue(sink.record(_diag("0005", location)))
        self.assertFalse(sink.record(_diag("0005", location)))
        self.assertEqual(sink.count(), 1)

    def test_equal_locations_built_separately_collide(self) -> None:
        """Test that equal locations from separate objects deduplicate."""
        sink = DiagnosticSink()
        sink.record(_diag("0005", SourceRange.span(1, 0, 1, 10)))
        sink.record(_diag("0005", SourceRange(Position(1, 0), Position(1, 10))))
        self.assertEqual(len(sink), 1)

    def test_different_messages_are_kept_by_default(self) -> None:
        """Test that different messages at one location are both kept."""
        sink = DiagnosticSink()
        sink.record(_diag("0011", "L1", "Usage of undefined variable '$A'"))
        sink.record(_diag("0011", "L1", "Usage of undefined variable '$B'"))
        self.assertEqual(sink.count(), 2)

    def test_location_strategy_collapses_messages(self) -> None:
        """Test that the location strategy keeps the first message only."""
        sink = DiagnosticSink(DedupStrategy.LOCATION)
        sink.record(_diag("0011", "L1", "first"))
        sink.record(_diag("0011", "L1", "second"))
        self.assertEqual([d.message for d in sink.results()], ["first"])
        self.assertIs(sink.strategy, DedupStrategy.LOCATION)

    def test_same_message_different_rule_is_kept(self) -> None:
        """Test that the rule code is part of the key."""
        sink = DiagnosticSink()
        sink.record(_diag("0010", "L1"))
        sink.record(_diag("0011", "L1"))
        self.assertEqual(sink.count(), 2)

    def test_severity_is_not_part_of_the_key(self) -> None:
        """Test that severity does not affect deduplication."""
        sink = DiagnosticSink()
        sink.record(Diagnostic("0001", "A", "m", "L1", severity=Severity.INFO))
        sink.record(Diagnostic("0001", "A", "m", "L1", severity=Severity.ERROR))
        self.assertEqual(sink.count(), 1)


class TestDiagnosticSinkResults(unittest.TestCase):
    """Tests for result ordering."""

    def test_results_follow_record_order_not_code_order(self) -> None:
        """Test that results keep recording order."""
        sink = DiagnosticSink()
        for code in ["0014", "0001", "0009", "0003"]:
            sink.record(_diag(code, "L1"))
        self.assertEqual(
            [d.rule_code for d in sink.results()], ["0014", "0001", "0009", "0003"])

    def test_duplicate_keeps_first_position(self) -> None:
        """Test that a duplicate does not move the original."""
        sink = DiagnosticSink()
        sink.record(_diag("0002", "L1"))
        sink.record(_diag("0001", "L1"))
        sink.record(_diag("0002", "L1"))
        self.assertEqual([d.rule_code for d in sink], ["0002", "0001"])

    def test_results_is_a_snapshot(self) -> None:
        """Test that later records do not change an earlier results tuple."""
        sink = DiagnosticSink()
        sink.record(_diag("0001", "L1"))
        snapshot = sink.results()
        sink.record(_diag("0002", "L1"))
        self.assertEqual(len(snapshot), 1)
        self.assertEqual(sink.count(), 2)

    def test_concurrent_records_deduplicate(self) -> None:
        """Test that concurrent records of one diagnostic keep a single copy."""
        sink = DiagnosticSink()
        barrier = threading.Barrier(8)

        def record(index: int) -> None:
            barrier.wait()
            for line in range(50):
                sink.record(_diag("0001", SourceRange.at(line)))
                sink.record(_diag("0002", SourceRange.at(index * 1000 + line)))

        threads = [threading.Thread(target=record, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(sink.count(), 50 + 8 * 50)


class TestDiagnostic(unittest.TestCase):
    """Tests for the Diagnostic value object."""

    def test_key_by_strategy(self) -> None:
        """Test the key produced for each dedup strategy."""
        diagnostic = _diag("0005", "L1", "m")
        self.assertEqual(diagnostic.key(), ("0005", "L1", "m"))
        self.assertEqual(diagnostic.key(DedupStrategy.LOCATION), ("0005", "L1"))

    def test_to_dict(self) -> None:
        """Test the dictionary form of a diagnostic."""
        diagnostic = Diagnostic(
            rule_code="0008",
            rule_name="MaintainerDeprecated",
            message="Maintainer instruction is deprecated in favor of using label",
            location=SourceRange.span(2, 0, 2, 22),
            severity=Severity.INFO,
            description="The MAINTAINER instruction is deprecated",
            url="http://docs.docker.com/go/build-rules/maintainer-deprecated",
        )
        self.assertEqual(
            diagnostic.to_dict(),
            {
                "code": "0008",
                "name": "MaintainerDeprecated",
                "message": "Maintainer instruction is deprecated in favor of using label",
                "location": "2:0-2:22",
                "severity": "info",
                "description": "The MAINTAINER instruction is deprecated",
                "url": "http://docs.docker.com/go/build-rules/maintainer-deprecated",
            },
        )

    def test_point_range_renders_as_single_position(self) -> None:
        """Test that an empty range renders as one position."""
        self.assertEqual(str(SourceRange.at(4, 2)), "4:2")

    def test_default_severity_is_warning(self) -> None:
        """Test that diagnostics default to warning severity."""
        self.assertIs(_diag("0001", "L1").severity, Severity.WARNING)
