from __future__ import annotations

from app.models.metric import MetricDefinition
from app.services.metric_source import InMemoryMetricSource, MetricSource


def test_in_memory_source_satisfies_protocol(source: InMemoryMetricSource) -> None:
    assert isinstance(source, MetricSource)


def test_collect_empty_by_default(source: InMemoryMetricSource) -> None:
    assert list(source.collect()) == []


def test_publish_replaces_snapshot(
    source: InMemoryMetricSource, http_requests: MetricDefinition
) -> None:
    other = MetricDefinition(name="up", help="Up", type="gauge")
    source.publish([http_requests, other])
    source.publish([other])
    assert list(source.collect()) == [other]


def test_snapshot_is_decoupled_from_caller_list(
    source: InMemoryMetricSource, http_requests: MetricDefinition
) -> None:
    published = [http_requests]
    source.publish(published)
    published.append(MetricDefinition(name="late", help="", type="gauge"))
    assert [m.name for m in source.collect()] == ["http_requests"]


def test_clear(source: InMemoryMetricSource, http_requests: MetricDefinition) -> None:
    source.publish([http_requests])
    source.clear()
    assert list(source.collect()) == []


def test_constructor_seeds_snapshot(http_requests: MetricDefinition) -> None:
    source = InMemoryMetricSource([http_requests])
    assert list(source.collect()) == [http_requests]
