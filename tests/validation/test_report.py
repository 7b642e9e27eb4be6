"""Tests for violation report rendering."""

from pathlib import Path

from module_insight.validation import (
    ViolationRecord,
    format_violations,
    group_errors,
    write_error_report,
)


def record(entity, source, owners=("Acme_Bar",)):
    return ViolationRecord(
        entity_name=entity,
        referencing_module="Acme_Foo",
        offending_owner_modules=owners,
        source_file=source,
    )


class TestFormatViolations:
    def test_block_layout(self, tmp_path):
        path = tmp_path / "FooTest.xml"
        block = format_violations(
            path, [record("BarData", path), record("SharedData", path, ("Acme_Bar", "Acme_Baz"))]
        )
        assert block.splitlines() == [
            f'File "{path.resolve()}"',
            "contains entity references that violate dependency constraints:",
            "\t BarData from module(s): Acme_Bar",
            "\t SharedData from module(s): Acme_Bar, Acme_Baz",
        ]


class TestGroupErrors:
    def test_one_block_per_file(self, tmp_path):
        first = tmp_path / "First.xml"
        second = tmp_path / "Second.xml"
        errors = group_errors([record("A", first), record("B", second), record("C", first)])

        assert list(errors) == [str(first.resolve()), str(second.resolve())]
        assert len(errors[str(first.resolve())]) == 1
        assert "\t C from module(s)" in errors[str(first.resolve())][0]

    def test_no_violations(self):
        assert group_errors([]) == {}


class TestWriteErrorReport:
    """Test the report file and summary line."""

    def test_no_errors_writes_nothing(self, tmp_path):
        summary = write_error_report({}, "report", "Check", tmp_path)
        assert summary == "Check: No errors found."
        assert list(tmp_path.iterdir()) == []

    def test_writes_blocks(self, tmp_path):
        errors = {"/a.xml": ["block a"], "/b.xml": ["block b"]}
        summary = write_error_report(errors, "report", "Check", tmp_path / "out")

        output = tmp_path / "out" / "report.txt"
        assert output.read_text() == "block a\n\nblock b\n"
        assert summary == f"Check: Errors found across 2 file(s). Error details output to {output}"

    def test_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        summary = write_error_report({"/a.xml": ["block"]})
        assert (tmp_path / "mftf-dependency-checks.txt").exists()
        assert summary.startswith("MFTF File Dependency Check: Errors found across 1 file(s).")
        assert Path.cwd() == tmp_path
