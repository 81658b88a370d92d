import pytest
from press_core.models.report import ComparisonData, CountDiff, SampleComparison
from press_core.validation.report import FAIL_MARK, PASS_MARK, ReportAssembler


@pytest.fixture
def assembler():
    return ReportAssembler()


def _comparison():
    return ComparisonData(
        counts={
            "post": {
                "publish": CountDiff(source=24331, destination=24331),
                "draft": CountDiff(source=5, destination=3),
            }
        },
        samples={
            "177232": SampleComparison(record_id=177232, fields={"title": True, "meta": True}),
            "177233": SampleComparison(record_id=177233, fields={"title": False, "meta": True, "excerpt": False}),
            "177234": SampleComparison(record_id=177234, fields={"title": False}, destination_present=False),
        },
    )


def test_count_messages(assembler):
    report = assembler.assemble(_comparison(), title="Posts")
    assert report.title == "Posts"
    assert report.sections["counts"] == {
        "post.publish": "✅ post publish count is 24331 vs 24331.",
        "post.draft": "❌ post draft count is 5 vs 3 (diff 2).",
    }


def test_sample_messages(assembler):
    samples = assembler.assemble(_comparison()).sections["samples"]
    assert samples["177232"] == "✅ Record 177232 matches 1:1 with the destination."
    assert samples["177233"] == "❌ Record 177233 differs between source and destination: title, excerpt."
    assert samples["177234"] == "❌ Record 177234 is missing from the destination."


def test_summary_and_passed(assembler):
    report = assembler.assemble(_comparison())
    assert report.summary == {"pass": 2, "fail": 3}
    assert report.passed is False


def test_empty_relations_section_omitted(assembler):
    assert list(assembler.assemble(_comparison()).sections) == ["counts", "samples"]


def test_relations_messages(assembler):
    comparison = ComparisonData(relations={"10": True, "11": False})
    relations = assembler.assemble(comparison).sections["relations"]
    assert relations == {
        "10": "✅ Record 10 terms match.",
        "11": "❌ Record 11 terms differ between source and destination.",
    }


def test_all_passing_report(assembler):
    comparison = ComparisonData(counts={"user": {"editor": CountDiff(source=3, destination=3)}})
    report = assembler.assemble(comparison)
    assert report.passed is True
    assert report.summary == {"pass": 1, "fail": 0}
    assert report.sections["samples"] == {}


def test_input_not_mutated(assembler):
    comparison = _comparison()
    before = comparison.model_dump()
    assembler.assemble(comparison)
    assembler.assemble(comparison)
    assert comparison.model_dump() == before


def test_same_input_same_report(assembler):
    assert assembler.assemble(_comparison()) == assembler.assemble(_comparison())


class TestGenericMappings:
    """Plain section -> key -> verdict mappings are rendered too."""

    def test_boolean_verdicts(self, assembler):
        report = assembler.assemble({"checks": {"slug": True, "author": False}})
        assert report.sections["checks"] == {
            "slug": f"{PASS_MARK} slug matches.",
            "author": f"{FAIL_MARK} author does not match.",
        }

    def test_numeric_verdicts(self, assembler):
        report = assembler.assemble({"drift": {"comments": 0, "revisions": -4}})
        assert report.sections["drift"]["comments"].startswith(PASS_MARK)
        assert report.sections["drift"]["revisions"] == f"{FAIL_MARK} revisions differs by -4."

    def test_nested_groups_flatten(self, assembler):
        report = assembler.assemble({"counts": {"page": {"publish": CountDiff(source=1, destination=2)}}})
        assert report.sections["counts"] == {"page.publish": "❌ page publish count is 1 vs 2 (diff -1)."}

    def test_unknown_verdict_fails(self, assembler):
        report = assembler.assemble({"other": {"x": "weird"}})
        assert report.sections["other"]["x"].startswith(FAIL_MARK)
        assert report.summary["fail"] == 1

    def test_dotted_group_names_do_not_collide(self, assembler):
        counts = {
            "a.b": {"c": CountDiff(source=1, destination=1)},
            "a": {"b.c": CountDiff(source=2, destination=3)},
        }
        report = assembler.assemble({"counts": counts})
        assert report.sections["counts"] == {
            "a\\.b.c": "✅ a.b c count is 1 vs 1.",
            "a.b\\.c": "❌ a b.c count is 2 vs 3 (diff -1).",
        }
        assert report.summary == {"pass": 1, "fail": 1}
