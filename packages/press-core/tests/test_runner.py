import json

import pytest
from press_core.data.local import LocalContentReader
from press_core.errors import RemoteUnavailable
from press_core.models.dataset import Dataset, SampleRecord
from press_core.models.settings import ValidationSettings
from press_core.remote.client import HttpRemoteDataClient
from press_core.validation import PostValidator, UserValidator
from press_core.validation.runner import build_validator, default_client, resolve_names, run_validations


class StaticReader:
    def __init__(self, dataset):
        self.dataset = dataset

    def get_data(self, sample_count=None):
        return self.dataset


class EchoClient:
    """Returns the same counts for every count path and echoes requested ids."""

    def __init__(self, counts=None, fail_on=None):
        self.counts = counts or {}
        self.fail_on = fail_on
        self.paths = []

    def get_remote_data(self, path, params=None):
        self.paths.append(path)
        if self.fail_on and path.startswith(self.fail_on):
            raise RemoteUnavailable(path, "http_503")
        if path.endswith("/count"):
            return self.counts
        params = params or {}
        if params.get("type") == "terms" and path.startswith("validation/post"):
            return {}
        id_field = "term_id" if path.startswith("validation/taxonomy") else "ID"
        return [{id_field: record_id} for record_id in params.get("ids", [])]


def _readers():
    return {
        "posts": StaticReader(Dataset(counts={"post": {"publish": 1}}, sample=[SampleRecord.from_mapping({"ID": 1})])),
        "taxonomies": StaticReader(
            Dataset(counts={"category": {"total": 1}}, sample=[SampleRecord.from_mapping({"term_id": 7}, id_field="term_id")])
        ),
        "users": StaticReader(Dataset(counts={"user": {"editor": 1}}, sample=[SampleRecord.from_mapping({"ID": 2})])),
    }


class TestResolveNames:
    def test_all_expands_in_registry_order(self):
        assert resolve_names(["all"]) == ["posts", "taxonomies", "users"]

    def test_empty_means_all(self):
        assert resolve_names([]) == ["posts", "taxonomies", "users"]

    def test_case_insensitive_and_ordered(self):
        assert resolve_names(["Users", "posts"]) == ["posts", "users"]

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="comments"):
            resolve_names(["comments"])


class TestBuildValidator:
    def test_requires_local_folder(self):
        with pytest.raises(ValueError, match="local_folder"):
            build_validator("posts", ValidationSettings(), client=EchoClient())

    def test_local_reader_from_folder(self, tmp_path):
        validator = build_validator("users", ValidationSettings(local_folder=str(tmp_path)), client=EchoClient())
        assert isinstance(validator, UserValidator)
        assert isinstance(validator.reader, LocalContentReader)
        assert validator.reader.kind.name == "users"

    def test_default_client_requires_domain(self):
        with pytest.raises(ValueError, match="remote_domain"):
            build_validator("posts", ValidationSettings(), reader=StaticReader(Dataset()))

    def test_default_client_from_settings(self):
        client = default_client(ValidationSettings(remote_domain="example.com", remote_key="k", timeout_seconds=3))
        assert isinstance(client, HttpRemoteDataClient)
        assert client.remote_domain == "https://example.com"
        assert client.timeout_seconds == 3


class TestRunValidations:
    def test_all_reports_in_order(self):
        counts = {"post": {"publish": 1}, "category": {"total": 1}, "user": {"editor": 1}}
        reports = run_validations(["all"], ValidationSettings(), client=EchoClient(counts), readers=_readers())
        assert list(reports) == ["posts", "taxonomies", "users"]
        assert all(report.passed for report in reports.values())
        assert reports["taxonomies"].sections["samples"]["7"].startswith("✅")

    def test_single_validator(self):
        reports = run_validations(["posts"], ValidationSettings(), client=EchoClient(), readers=_readers())
        assert list(reports) == ["posts"]
        assert reports["posts"].sections["counts"]["post.publish"] == "❌ post publish count is 1 vs 0 (diff 1)."

    def test_failure_aborts_run(self):
        client = EchoClient(fail_on="validation/taxonomy")
        with pytest.raises(RemoteUnavailable):
            run_validations(["all"], ValidationSettings(), client=client, readers=_readers())

    def test_parallel_with_client_factory(self):
        counts = {"post": {"publish": 1}, "category": {"total": 1}, "user": {"editor": 1}}
        created = []

        def factory(settings):
            client = EchoClient(counts)
            created.append(client)
            return client

        reports = run_validations(
            ["all"],
            ValidationSettings(max_parallel=3),
            readers=_readers(),
            client_factory=factory,
        )
        assert list(reports) == ["posts", "taxonomies", "users"]
        assert len(created) == 3
        assert all(report.passed for report in reports.values())

    def test_reports_serialize(self):
        reports = run_validations(["users"], ValidationSettings(), client=EchoClient(), readers=_readers())
        payload = json.loads(reports["users"].model_dump_json())
        assert payload["title"] == "Users"
        assert payload["summary"] == {"pass": 1, "fail": 1}

    def test_validator_classes_registered(self):
        validator = build_validator("posts", ValidationSettings(), client=EchoClient(), reader=StaticReader(Dataset()))
        assert isinstance(validator, PostValidator)
