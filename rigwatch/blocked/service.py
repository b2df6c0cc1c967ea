"""
Service layer for the blocked work report.

Selects the sources to query, fans the queries out concurrently, and merges
the per-source results into an ``AggregateReport``.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from ..beads.store import BeadsStore, BlockedStore, town_beads_path
from ..config.constants import TOWN_SOURCE_NAME
from ..config.settings import ReportConfig
from ..exceptions import RigNotFoundError
from ..rigs import Rig
from .filters import apply_filters
from .models import AggregateReport, BlockedSummary, SourceResult

logger = logging.getLogger(__name__)

StoreFactory = Callable[[Path], BlockedStore]


@dataclass(frozen=True)
class Source:
    """A bead store to query: the town store or one rig's store."""

    name: str
    beads_path: Path


def select_sources(
    town_root: Union[str, Path],
    rigs: Iterable[Rig],
    rig_filter: Optional[str] = None,
) -> List[Source]:
    """
    Decide which stores a report covers.

    Without a filter this is the town store plus every rig. With a filter it
    is only the named rig.

    Raises:
        RigNotFoundError: If rig_filter names no discovered rig.
    """
    rigs = list(rigs)

    if rig_filter:
        matches = [r for r in rigs if r.name == rig_filter]
        if not matches:
            raise RigNotFoundError(rig_filter)
        return [Source(name=matches[0].name, beads_path=matches[0].beads_path)]

    sources = [Source(name=TOWN_SOURCE_NAME, beads_path=town_beads_path(town_root))]
    sources.extend(Source(name=r.name, beads_path=r.beads_path) for r in rigs)
    return sources


def query_source(source: Source, store_factory: StoreFactory) -> SourceResult:
    """Query and filter one source; failures become the result's error."""
    try:
        store = store_factory(source.beads_path)
        issues = store.blocked()
        filtered = apply_filters(issues, store.formula_names(), store.wisp_ids())
    except Exception as e:
        logger.warning(f"Blocked query failed for {source.name}: {e}")
        return SourceResult(name=source.name, error=str(e) or type(e).__name__)

    logger.debug(f"{source.name}: {len(issues)} blocked, {len(filtered)} after filtering")
    return SourceResult(name=source.name, issues=filtered)


def fan_out(sources: List[Source], store_factory: StoreFactory) -> List[SourceResult]:
    """
    Query every source concurrently, one worker per source.

    Results are collected in completion order. A failing source never
    affects the others, and there is no timeout: a hung store query holds
    up the whole report.
    """
    if not sources:
        return []

    results: List[SourceResult] = []
    lock = threading.Lock()

    def run(source: Source) -> None:
        result = query_source(source, store_factory)
        with lock:
            results.append(result)

    with ThreadPoolExecutor(max_workers=len(sources), thread_name_prefix="blocked") as executor:
        futures = [executor.submit(run, source) for source in sources]
        wait(futures)

    # Re-raise anything that escaped run()
    for future in futures:
        future.result()

    return results


def _source_sort_key(result: SourceResult):
    return (result.name != TOWN_SOURCE_NAME, result.name)


def aggregate(results: Iterable[SourceResult], town_root: Union[str, Path]) -> AggregateReport:
    """
    Order the per-source results and compute the summary.

    The town comes first, then rigs by name. Issues within a source are
    stably sorted by priority.
    """
    sources = sorted(results, key=_source_sort_key)

    for source in sources:
        if source.issues:
            source.issues.sort(key=lambda issue: issue.priority)

    summary = BlockedSummary()
    for source in sources:
        count = source.issue_count
        summary.total += count
        summary.by_source[source.name] = count
        for issue in source.issues or []:
            summary.add_to_bucket(issue.priority)

    return AggregateReport(sources=sources, summary=summary, town_root=str(town_root))


def build_report(
    config: ReportConfig,
    town_root: Union[str, Path],
    rigs: Iterable[Rig],
    store_factory: Optional[StoreFactory] = None,
) -> AggregateReport:
    """
    Build the blocked work report for a town.

    Raises:
        RigNotFoundError: If config.rig names no discovered rig. Raised before
            any store is queried.
    """
    sources = select_sources(town_root, rigs, config.rig)

    if store_factory is None:
        store_factory = partial(BeadsStore, bd_bin=config.bd_bin)

    logger.debug(f"Querying {len(sources)} sources: {', '.join(s.name for s in sources)}")
    results = fan_out(sources, store_factory)
    return aggregate(results, town_root)
