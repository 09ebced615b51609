#!/usr/bin/env python3
"""
Analysis pipeline orchestration.

A pipeline is a set of named stages sharing one context dictionary. Stages
declare which other stages must run first; the pipeline keeps a resolved
execution order and re-resolves it whenever a stage is added or removed.

A stage that raises aborts the invocation with PipelineStageError, so a
caller either gets every applicable result or none of them.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
import logging
import time

from ..exceptions import PipelineStageError

logger = logging.getLogger(__name__)


class AnalysisStage(ABC):
    """One step of an analysis run."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.name = self.__class__.__name__

    @abstractmethod
    def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run this stage.

        Args:
            context: Shared context holding earlier stages' output

        Returns:
            Keys to merge into the context
        """

    def can_process(self, context: Dict[str, Any]) -> bool:
        """False skips the stage for this run (e.g. not requested by the analysis type)."""
        return True

    def get_dependencies(self) -> List[str]:
        """Names of stages that must run before this one."""
        return []


class AnalysisPipeline:
    """Dependency-ordered collection of analysis stages."""

    def __init__(self):
        self.stages: Dict[str, AnalysisStage] = {}
        self.stage_order: List[str] = []

    def add_stage(self, stage: AnalysisStage, name: Optional[str] = None) -> 'AnalysisPipeline':
        """
        Register a stage (replacing any stage of the same name).

        Returns:
            Self for method chaining

        Raises:
            ValueError: If the new stage creates a dependency cycle
        """
        stage_name = name or stage.name
        self.stages[stage_name] = stage
        self.stage_order = self._ordered_names()
        logger.debug(f"Added analysis stage {stage_name}; order is now {self.stage_order}")
        return self

    def remove_stage(self, name: str) -> 'AnalysisPipeline':
        if self.stages.pop(name, None) is not None:
            self.stage_order = self._ordered_names()
            logger.debug(f"Removed analysis stage {name}")
        return self

    def run(self, text: str, initial_context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Run every applicable stage over one sample.

        Args:
            text: Sample text
            initial_context: Request-level inputs (analysis type, baseline,
                mission statement, identifiers, pre-anonymized text)

        Returns:
            Final context; per-stage timings are under 'stage_timings'

        Raises:
            PipelineStageError: If any stage fails
        """
        context = dict(initial_context or {})
        context['text'] = text
        timings: Dict[str, float] = {}
        context['stage_timings'] = timings
        started = time.perf_counter()

        for stage_name in self.stage_order:
            stage = self.stages[stage_name]
            if not stage.can_process(context):
                logger.debug(f"Stage {stage_name} not applicable, skipped")
                continue

            stage_started = time.perf_counter()
            try:
                produced = stage.process(context)
            except Exception as e:
                logger.error(f"Stage {stage_name} failed: {e}", exc_info=True)
                raise PipelineStageError(stage_name, e) from e

            context.update(produced or {})
            timings[stage_name] = time.perf_counter() - stage_started

        context['pipeline_duration'] = time.perf_counter() - started
        context['pipeline_completed'] = True
        logger.debug(f"Pipeline ran {len(timings)} stage(s) in {context['pipeline_duration']:.4f}s")
        return context

    def get_stage_info(self) -> Dict[str, Dict[str, Any]]:
        """Registered stages with their dependencies and position."""
        return {
            name: {
                'class': stage.__class__.__name__,
                'dependencies': stage.get_dependencies(),
                'config': stage.config,
                'order': self.stage_order.index(name),
            }
            for name, stage in self.stages.items()
        }

    def _ordered_names(self) -> List[str]:
        # Depth-first topological sort; registration order breaks ties
        order: List[str] = []
        done = set()
        in_progress = set()

        def place(name: str) -> None:
            if name in done:
                return
            if name in in_progress:
                raise ValueError(f"Circular dependency detected involving {name}")
            in_progress.add(name)
            for dependency in self.stages[name].get_dependencies():
                if dependency in self.stages:
                    place(dependency)
                else:
                    logger.warning(f"Dependency {dependency} not found for stage {name}")
            in_progress.discard(name)
            done.add(name)
            order.append(name)

        for name in self.stages:
            place(name)
        return order
