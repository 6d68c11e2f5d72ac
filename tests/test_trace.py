"""Tests for diagnostic reports and the trace sink."""

from __future__ import annotations

import logging

import numpy as np

from unshred.solver import SolverConfig, UnshredSolver
from unshred.splitter import ShredSplitter
from unshred.trace import LoggingTrace, RecordingTrace, format_seam_report, format_similarity_matrix
from unshred.utils import generate_random_image


def test_format_similarity_matrix_percentage_grid() -> None:
    """Header lists column indices; cells are percentages."""
    text = format_similarity_matrix(np.array([[1.0, 0.5], [0.25, 0.0]]))
    lines = text.splitlines()
    assert lines[0] == "      " + "     0     1"
    assert lines[1] == "     0100.00 50.00"
    assert lines[2] == "     1 25.00  0.00"


def test_format_seam_report_has_row_per_position() -> None:
    """One line per ring position plus a header."""
    report = format_seam_report([2, 0, 1], np.array([0.9, 0.5, 0.1]))
    lines = report.splitlines()
    assert len(lines) == 4
    assert lines[1].split()[:3] == ["1", "2", "0"]


def test_trace_does_not_change_ordering() -> None:
    """Recording or logging traces leave the solved ordering as it was."""
    shreds = ShredSplitter(8).split(generate_random_image(height=10, width=64, seed=8))
    plain = UnshredSolver(SolverConfig(shred_width=8)).solve(shreds)
    recording = RecordingTrace()
    traced = UnshredSolver(SolverConfig(shred_width=8), trace=recording).solve(shreds)
    logged = UnshredSolver(SolverConfig(shred_width=8), trace=LoggingTrace()).solve(shreds)

    assert plain.ordering == traced.ordering == logged.ordering
    assert len(recording.steps) == 8
    assert len(recording.seams) == 1
    assert recording.orderings == [plain.ordering]


def test_logging_trace_emits_debug_records(caplog) -> None:
    """LoggingTrace writes chain, seam and ordering records at DEBUG."""
    shreds = ShredSplitter(8).split(generate_random_image(height=10, width=32, seed=1))
    with caplog.at_level(logging.DEBUG, logger="unshred.trace"):
        UnshredSolver(SolverConfig(shred_width=8), trace=LoggingTrace()).solve(shreds)
    messages = [record.getMessage() for record in caplog.records]
    assert any(m.startswith("chain[0]") for m in messages)
    assert any(m.startswith("seam after") for m in messages)
    assert any(m.startswith("final ordering") for m in messages)
