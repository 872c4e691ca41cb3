"""
Ordered task pipeline.

A pipeline is a list of named steps run one after another. The first
failing step aborts the rest. Elapsed time is reported per step once the
pipeline finishes.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from .exceptions import StepFailedException

logger = logging.getLogger(__name__)


@dataclass
class Step:
    name: str
    action: Callable[[], Any]


@dataclass
class StepResult:
    name: str
    elapsed: float
    value: Any = None


@dataclass
class Pipeline:
    name: str
    steps: List[Step] = field(default_factory=list)

    def add(self, name: str, action: Callable[[], Any]) -> 'Pipeline':
        self.steps.append(Step(name, action))
        return self

    def add_concurrent(self, name: str, actions: Dict[str, Callable[[], Any]]) -> 'Pipeline':
        """Add one step that runs independent actions at the same time."""
        self.steps.append(Step(name, lambda: run_concurrently(actions)))
        return self

    def extend(self, other: 'Pipeline') -> 'Pipeline':
        self.steps.extend(other.steps)
        return self

    @property
    def step_names(self) -> List[str]:
        return [step.name for step in self.steps]

    def run(self) -> List[StepResult]:
        print(f"🏗️  Running {self.name}: {' → '.join(self.step_names)}")
        results = []
        for step in self.steps:
            logger.debug(f"Starting step {step.name}")
            started = time.perf_counter()
            try:
                value = step.action()
            except Exception as e:
                print(f"❌ {step.name} failed after {time.perf_counter() - started:.2f}s")
                raise StepFailedException(step.name, e) from e
            results.append(StepResult(step.name, time.perf_counter() - started, value))
            print(f"✅ {step.name}")
        report_timings(results)
        return results


def run_concurrently(actions: Dict[str, Callable[[], Any]]) -> Dict[str, Any]:
    """Run independent actions in parallel and wait for all of them.

    Re-raises the first failure, in declaration order, after every action
    has finished.
    """
    if not actions:
        return {}
    with ThreadPoolExecutor(max_workers=len(actions)) as executor:
        futures = {name: executor.submit(action) for name, action in actions.items()}
    return {name: future.result() for name, future in futures.items()}


def report_timings(results: List[StepResult]) -> float:
    """Print elapsed time per step and the total."""
    total = sum(result.elapsed for result in results)
    print("")
    print(f"⏱️  Execution time {total:.2f}s")
    for result in results:
        share = (result.elapsed / total * 100) if total else 0.0
        print(f"   {result.name:<16} {result.elapsed:>7.2f}s {share:>5.1f}%")
    return total
