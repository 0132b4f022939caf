"""
Pipeline Orchestrator - Stream C# files through Read -> Generate -> Write.

Each stage is a pool of asyncio worker tasks reading from a bounded queue:
- Read: path -> SourceText (aiofiles)
- Generate: SourceText -> 0..N GeneratedTestFile (CPU-bound, runs on a
  dedicated thread pool so it never blocks the event loop)
- Write: GeneratedTestFile -> <output_dir>/<QualifiedName>.cs (aiofiles)

A stage closes its downstream queue (one sentinel per downstream worker) once
all of its own workers have drained, so completion flows from the feeder to
the Write stage without shared flags.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any

import aiofiles

from ...constants import OUTPUT_EXTENSION, QUEUE_CAPACITY_PER_WORKER
from ..exceptions import DuplicateOutputError, PipelineStageError
from ..generators import GeneratedTestFile, ScaffoldEngine
from .models import PipelineFailure, PipelineReport, SourceText

logger = logging.getLogger(__name__)

# End-of-stream marker; every consumer worker receives exactly one
_CLOSED = object()

Handler = Callable[[Any], Awaitable[list[Any]]]


@dataclass
class _StageResult:
    """What one stage's workers processed, produced (terminal stage only) and failed on."""
    processed: list[str] = field(default_factory=list)
    produced: list[Any] = field(default_factory=list)
    failures: list[PipelineFailure] = field(default_factory=list)

    def merge(self, other: "_StageResult") -> None:
        self.processed.extend(other.processed)
        self.produced.extend(other.produced)
        self.failures.extend(other.failures)


class ScaffoldPipeline:
    """
    Bounded-parallelism Read -> Generate -> Write pipeline.

    Usage:
        pipeline = ScaffoldPipeline("out", read_workers=2, generate_workers=4, write_workers=2)
        report = await pipeline.run(["A.cs", "B.cs"])
    """

    def __init__(
        self,
        output_dir: str | Path,
        read_workers: int = 1,
        generate_workers: int = 1,
        write_workers: int = 1,
        engine: ScaffoldEngine | None = None,
        fail_fast: bool = True,
        extension: str = OUTPUT_EXTENSION
    ):
        """
        Args:
            output_dir: Directory receiving the generated files (created if missing)
            read_workers: Parallelism of the Read stage (>= 1)
            generate_workers: Parallelism of the Generate stage (>= 1)
            write_workers: Parallelism of the Write stage (>= 1)
            engine: ScaffoldEngine instance (creates default if None)
            fail_fast: Abort the whole run on the first stage fault; when
                False, failed items are recorded in the report and skipped
            extension: Extension of the written files

        Raises:
            ValueError: If a worker count is not an integer or is below 1
        """
        for name, value in (
            ("read_workers", read_workers),
            ("generate_workers", generate_workers),
            ("write_workers", write_workers),
        ):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer (got {value!r})")
            if value < 1:
                raise ValueError(f"{name} must be at least 1 (got {value})")

        self.output_dir = Path(output_dir)
        self.read_workers = read_workers
        self.generate_workers = generate_workers
        self.write_workers = write_workers
        self.engine = engine or ScaffoldEngine()
        self.fail_fast = fail_fast
        self.extension = extension

    async def run(self, paths: Iterable[str]) -> PipelineReport:
        """
        Submit all paths and wait for the Write stage to complete.

        Raises:
            PipelineStageError: On the first stage fault when fail_fast is set
        """
        paths = [str(path) for path in paths]
        self.output_dir.mkdir(parents=True, exist_ok=True)

        logger.info(
            f"Pipeline started: {len(paths)} file(s), parallelism "
            f"read={self.read_workers} generate={self.generate_workers} write={self.write_workers}"
        )

        read_queue: asyncio.Queue = asyncio.Queue(self.read_workers * QUEUE_CAPACITY_PER_WORKER)
        generate_queue: asyncio.Queue = asyncio.Queue(self.generate_workers * QUEUE_CAPACITY_PER_WORKER)
        write_queue: asyncio.Queue = asyncio.Queue(self.write_workers * QUEUE_CAPACITY_PER_WORKER)

        with ThreadPoolExecutor(
            max_workers=self.generate_workers,
            thread_name_prefix="scaffold-generate"
        ) as executor:
            tasks = [
                asyncio.create_task(self._feed(paths, read_queue)),
                asyncio.create_task(self._run_stage(
                    "read", self.read_workers, read_queue,
                    self._read, generate_queue, self.generate_workers
                )),
                asyncio.create_task(self._run_stage(
                    "generate", self.generate_workers, generate_queue,
                    partial(self._generate, executor), write_queue, self.write_workers
                )),
                asyncio.create_task(self._run_stage(
                    "write", self.write_workers, write_queue,
                    partial(self._write, set())
                )),
            ]

            _, read, generate, write = await _gather_or_cancel(tasks)

        report = PipelineReport(
            read=read.processed,
            written=sorted(write.produced),
            failures=[*read.failures, *generate.failures, *write.failures]
        )

        logger.info(
            f"Pipeline finished: {len(report.read)} read, {len(report.written)} written, "
            f"{len(report.failures)} failed"
        )
        return report

    # =========================================================================
    # Stage plumbing
    # =========================================================================

    async def _feed(self, paths: list[str], queue: asyncio.Queue) -> None:
        """Submit every input, then close the Read queue."""
        for path in paths:
            await queue.put(path)
        for _ in range(self.read_workers):
            await queue.put(_CLOSED)

    async def _run_stage(
        self,
        stage: str,
        workers: int,
        inbox: asyncio.Queue,
        handle: Handler,
        outbox: asyncio.Queue | None = None,
        downstream_workers: int = 0
    ) -> _StageResult:
        """Run a worker pool until its inbox closes, then close the outbox."""

        async def worker() -> _StageResult:
            result = _StageResult()
            while True:
                item = await inbox.get()
                if item is _CLOSED:
                    return result

                label = _label(item)
                try:
                    outputs = await handle(item)
                except Exception as e:
                    if self.fail_fast:
                        raise PipelineStageError(stage, label, e) from e
                    logger.warning(f"{stage} stage failed for {label}: {e}")
                    result.failures.append(PipelineFailure(stage, label, str(e)))
                    continue

                result.processed.append(label)
                if outbox is None:
                    result.produced.extend(outputs)
                else:
                    for output in outputs:
                        await outbox.put(output)

        logger.debug(f"Stage {stage} started with {workers} worker(s)")
        stage_result = _StageResult()
        worker_tasks = [asyncio.create_task(worker()) for _ in range(workers)]
        for worker_result in await _gather_or_cancel(worker_tasks):
            stage_result.merge(worker_result)

        if outbox is not None:
            for _ in range(downstream_workers):
                await outbox.put(_CLOSED)

        logger.debug(f"Stage {stage} drained: {len(stage_result.processed)} item(s)")
        return stage_result

    # =========================================================================
    # Stage handlers
    # =========================================================================

    async def _read(self, path: str) -> list[SourceText]:
        async with aiofiles.open(path, encoding="utf-8") as f:
            content = await f.read()
        logger.debug(f"Read {path} ({len(content)} chars)")
        return [SourceText(path=path, content=content)]

    async def _generate(
        self,
        executor: ThreadPoolExecutor,
        source: SourceText
    ) -> list[GeneratedTestFile]:
        loop = asyncio.get_running_loop()
        test_files = await loop.run_in_executor(
            executor, self.engine.generate_files, source.content
        )
        logger.debug(f"Generated {len(test_files)} test class(es) from {source.path}")
        return test_files

    async def _write(self, claimed: set[str], test_file: GeneratedTestFile) -> list[str]:
        name = test_file.qualified_name
        if name in claimed:
            raise DuplicateOutputError(name)
        claimed.add(name)

        target = self.output_dir / f"{name}{self.extension}"
        async with aiofiles.open(target, "w", encoding="utf-8") as f:
            await f.write(test_file.to_code())
        logger.debug(f"Wrote {target}")
        return [str(target)]


async def _gather_or_cancel(tasks: list[asyncio.Task]) -> list[Any]:
    """Await all tasks; on the first failure cancel the rest and re-raise."""
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def _label(item: Any) -> str:
    """Human-readable identity of a stage item."""
    if isinstance(item, SourceText):
        return item.path
    if isinstance(item, GeneratedTestFile):
        return item.qualified_name
    return str(item)


async def run_pipeline(
    paths: Iterable[str],
    output_dir: str | Path,
    read_workers: int = 1,
    generate_workers: int = 1,
    write_workers: int = 1,
    fail_fast: bool = True
) -> PipelineReport:
    """Scaffold tests for many C# files (see ScaffoldPipeline)."""
    pipeline = ScaffoldPipeline(
        output_dir,
        read_workers=read_workers,
        generate_workers=generate_workers,
        write_workers=write_workers,
        fail_fast=fail_fast
    )
    return await pipeline.run(paths)
