from __future__ import annotations

from numbers import Number
from typing import Any, Mapping

from press_core.models.report import ComparisonData, CountDiff, Report, SampleComparison

PASS_MARK = "✅"
FAIL_MARK = "❌"


def _mark(ok: bool) -> str:
    return PASS_MARK if ok else FAIL_MARK


def _escape_key(part: str) -> str:
    # Nested groups flatten to dotted keys; a literal dot in a group or status is escaped.
    return part.replace("\\", "\\\\").replace(".", "\\.")


class ReportAssembler:
    """Turns comparison verdicts into the section -> key -> message report.

    Holds no state and never mutates its input, so one instance can be
    shared between validators.
    """

    def assemble(
        self,
        comparison: ComparisonData | Mapping[str, Mapping[str, Any]],
        title: str = "Validation",
    ) -> Report:
        if isinstance(comparison, ComparisonData):
            sections_in: dict[str, Mapping[str, Any]] = {
                "counts": comparison.counts,
                "samples": comparison.samples,
            }
            if comparison.relations:
                sections_in["relations"] = comparison.relations
        else:
            sections_in = dict(comparison)

        sections: dict[str, dict[str, str]] = {}
        summary = {"pass": 0, "fail": 0}
        for section, rows in sections_in.items():
            rendered: dict[str, str] = {}
            for key, (ok, message) in self._walk(section, rows):
                rendered[key] = message
                summary["pass" if ok else "fail"] += 1
            sections[section] = rendered
        return Report(title=title, sections=sections, summary=summary)

    def _walk(self, section: str, rows: Mapping[str, Any], path: tuple[str, ...] = ()):
        for key, verdict in rows.items():
            row_path = (*path, str(key))
            if isinstance(verdict, Mapping):
                yield from self._walk(section, verdict, row_path)
            else:
                row_key = ".".join(_escape_key(part) for part in row_path)
                yield row_key, self.render(section, row_key, verdict, label=" ".join(row_path))

    def render(self, section: str, key: str, verdict: Any, label: str | None = None) -> tuple[bool, str]:
        if isinstance(verdict, CountDiff):
            label = label or key.replace(".", " ")
            return verdict.matched, f"{_mark(verdict.matched)} {label} count is {verdict.message}."
        if isinstance(verdict, SampleComparison):
            return verdict.matched, self._render_sample(verdict)
        if isinstance(verdict, bool):
            if section == "relations":
                text = "terms match" if verdict else "terms differ between source and destination"
                return verdict, f"{_mark(verdict)} Record {label or key} {text}."
            return verdict, f"{_mark(verdict)} {key} {'matches' if verdict else 'does not match'}."
        if isinstance(verdict, Number):
            ok = verdict == 0
            return ok, f"{_mark(ok)} {key} differs by {verdict}."
        return False, f"{FAIL_MARK} {key}: {verdict}"

    @staticmethod
    def _render_sample(verdict: SampleComparison) -> str:
        if not verdict.destination_present:
            return f"{FAIL_MARK} Record {verdict.record_id} is missing from the destination."
        if verdict.matched:
            return f"{PASS_MARK} Record {verdict.record_id} matches 1:1 with the destination."
        fields = ", ".join(verdict.mismatched_fields())
        return f"{FAIL_MARK} Record {verdict.record_id} differs between source and destination: {fields}."
