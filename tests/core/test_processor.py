# tests/core/test_processor.py

from k8s_resource.core.aggregator import aggregate
from k8s_resource.core.classifier import NodeClassifier
from k8s_resource.core.fit_checker import find_fitting_nodes
from k8s_resource.core.processor import DataProcessor
from k8s_resource.models.cluster import JobRequirement
from k8s_resource.models.node import CollectionResult, CollectionStrategy, NodeUsageRecord


async def test_run_normalizes_collected_records(make_collector, single_node_result):
    processor = DataProcessor(make_collector(single_node_result), NodeClassifier("fargate-"))

    snapshot = await processor.run()

    assert snapshot.collected == single_node_result
    [record] = snapshot.records
    assert (record.name, record.cpu_used, record.cpu_total, record.mem_used, record.mem_total) == (
        "n1",
        2.0,
        4.0,
        8.0,
        16.0,
    )
    assert record.is_burstable is False


async def test_empty_collection_yields_empty_snapshot(make_collector):
    processor = DataProcessor(make_collector(CollectionResult(strategy=CollectionStrategy.PER_NODE)))

    snapshot = await processor.run()

    assert snapshot.records == []
    assert aggregate(snapshot.records).total_cpu == 0.0


async def test_close_closes_collector(make_collector, single_node_result):
    collector = make_collector(single_node_result)
    processor = DataProcessor(collector)

    await processor.close()

    assert collector.closed is True


async def test_pipeline_is_deterministic(make_collector):
    result = CollectionResult(
        strategy=CollectionStrategy.BULK,
        usage=[
            NodeUsageRecord(name="b", cpu_usage_cores=1.0, memory_usage_gb=1.0),
            NodeUsageRecord(name="a", cpu_usage_cores=0.5, memory_usage_gb=2.0),
        ],
    )
    requirement = JobRequirement(cpu=0, memory=0)

    first = await DataProcessor(make_collector(result)).run()
    second = await DataProcessor(make_collector(result)).run()

    assert aggregate(first.records) == aggregate(second.records)
    assert find_fitting_nodes(first.records, requirement) == find_fitting_nodes(second.records, requirement)
