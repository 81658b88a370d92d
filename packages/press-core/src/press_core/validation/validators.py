"""Content-type validators for posts, taxonomy terms, and users."""

from __future__ import annotations

from press_core.models.dataset import Dataset
from press_core.models.report import ComparisonData

from .base import Validator


class PostValidator(Validator):
    name = "posts"
    title = "Posts"
    content_kind = "posts"
    relations_field = "terms"

    def fetch_destination_data(self) -> Dataset:
        ids = self.source_sample_ids()
        count_path = "validation/post/count"
        sample_path = "validation/post/sample"
        return Dataset(
            counts=self.decode_counts(count_path, self.fetch(count_path)),
            sample=self.decode_sample(sample_path, self.fetch(sample_path, {"type": "posts", "ids": ids})),
            relations=self.decode_relations(sample_path, self.fetch(sample_path, {"type": "terms", "ids": ids})),
        )

    def get_comparison_data(self, source: Dataset, destination: Dataset) -> ComparisonData:
        return ComparisonData(
            counts=self.compare_count(source.counts, destination.counts),
            samples=self.compare_sample(source.sample, destination.sample),
            relations=self.compare_relations(source.relations, destination.relations),
        )


class TaxonomyValidator(Validator):
    name = "taxonomies"
    title = "Taxonomies"
    content_kind = "terms"
    id_field = "term_id"

    def fetch_destination_data(self) -> Dataset:
        ids = self.source_sample_ids()
        count_path = "validation/taxonomy/count"
        sample_path = "validation/taxonomy/sample"
        return Dataset(
            counts=self.decode_counts(count_path, self.fetch(count_path)),
            sample=self.decode_sample(sample_path, self.fetch(sample_path, {"type": "terms", "ids": ids})),
        )

    def get_comparison_data(self, source: Dataset, destination: Dataset) -> ComparisonData:
        return ComparisonData(
            counts=self.compare_count(source.counts, destination.counts),
            samples=self.compare_sample(source.sample, destination.sample),
        )


class UserValidator(Validator):
    name = "users"
    title = "Users"
    content_kind = "users"

    def fetch_destination_data(self) -> Dataset:
        ids = self.source_sample_ids()
        count_path = "validation/user/count"
        sample_path = "validation/user/sample"
        return Dataset(
            counts=self.decode_counts(count_path, self.fetch(count_path)),
            sample=self.decode_sample(sample_path, self.fetch(sample_path, {"type": "users", "ids": ids})),
        )

    def get_comparison_data(self, source: Dataset, destination: Dataset) -> ComparisonData:
        return ComparisonData(
            counts=self.compare_count(source.counts, destination.counts),
            samples=self.compare_sample(source.sample, destination.sample),
        )
