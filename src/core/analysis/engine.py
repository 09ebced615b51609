#!/usr/bin/env python3
"""
Linguistic engine: one synchronous analysis invocation per text sample.

Order of work:
1. Validate the request
2. Anonymize and fingerprint the sample
3. Read the latest baseline (and the mission statement when not supplied)
4. Run the analysis pipeline
5. Register the fingerprint; one the store has already seen short-circuits
   with a duplicate response
6. Persist the analysis and newly opened alerts, then notify

Nothing is written before the pipeline succeeds, so a failed invocation can
be retried. Persistence failures are logged and never fail the invocation.
"""

import logging
from typing import Dict, Any, Optional, List

from ..anonymizer import anonymize_with_report
from ..config import EngineConfig
from ..exceptions import DriftEngineError, DatabaseError, InputValidationError, MissingFieldError, NotificationError
from ..models.alert import Alert
from ..models.analysis import AnalysisRequest, AnalysisResponse, AnalysisResult, AnalysisType
from ..vocabulary import VOCABULARY_VERSION
from .pipeline import AnalysisPipeline
from .stages import build_default_pipeline

logger = logging.getLogger(__name__)


class LinguisticEngine:
    """Runs analysis invocations against an optional store and notifier."""

    def __init__(self, store=None, config: Optional[EngineConfig] = None,
                 notifier=None, pipeline: Optional[AnalysisPipeline] = None):
        """
        Initialize the engine.

        Args:
            store: Persistence facade (DatabaseFacade or SupabaseApiAdapter);
                None runs fully offline with no deduplication
            config: Engine configuration (defaults when None)
            notifier: Alert notifier with notify_alerts(alerts); optional
            pipeline: Analysis pipeline (standard pipeline when None)
        """
        self.store = store
        self.config = config or EngineConfig()
        self.notifier = notifier
        self.pipeline = pipeline or build_default_pipeline()

    @property
    def persisting(self) -> bool:
        return self.store is not None and self.config.persist_results

    def validate(self, request: AnalysisRequest) -> AnalysisType:
        """
        Check required fields and limits.

        Returns:
            Parsed analysis type

        Raises:
            InputValidationError: If the request cannot be processed
        """
        missing = []
        if not request.text:
            missing.append('text')
        if not request.organization_id:
            missing.append('organizationId')
        if missing:
            raise MissingFieldError(missing)

        try:
            analysis_type = AnalysisType(request.analysis_type)
        except ValueError:
            raise InputValidationError(
                f"Unknown analysis type: {request.analysis_type}", fields=['analysisType']
            )

        if len(request.text) > self.config.max_text_length:
            raise InputValidationError(
                f"Text exceeds maximum length of {self.config.max_text_length} characters",
                fields=['text']
            )

        return analysis_type

    def process(self, request: AnalysisRequest) -> AnalysisResponse:
        """
        Run one analysis invocation.

        Args:
            request: Analysis request

        Returns:
            AnalysisResponse; duplicate samples return duplicate=True with no
            result and no alerts

        Raises:
            InputValidationError: On missing or malformed input
            PipelineStageError: If an analysis stage fails
        """
        analysis_type = self.validate(request)
        sample = request.to_sample()
        fingerprint = sample.fingerprint

        logger.info(f"Processing linguistic analysis for org {request.organization_id}, "
                    f"unit {request.unit_id} (sample {fingerprint[:12]}, {len(request.text)} chars)")

        anonymized_text, counts = anonymize_with_report(request.text)

        baseline = None
        if analysis_type.includes(AnalysisType.DRIFT):
            baseline = self._load_baseline(request.organization_id, request.unit_id)

        mission_statement = request.mission_statement
        if not mission_statement and analysis_type.includes(AnalysisType.RESONANCE):
            mission_statement = self._load_mission(request.organization_id)

        context = self.pipeline.run(request.text, {
            'anonymized_text': anonymized_text,
            'analysis_type': analysis_type,
            'baseline': baseline,
            'mission_statement': mission_statement,
            'organization_id': request.organization_id,
            'unit_id': request.unit_id,
        })

        if self.persisting and self._is_duplicate(sample.to_record(anonymized_text, counts)):
            logger.info(f"Sample {fingerprint[:12]} already processed, skipping")
            return AnalysisResponse(success=True, duplicate=True)

        features = context.get('features')
        result = AnalysisResult(
            organization_id=request.organization_id,
            unit_id=request.unit_id,
            analysis_type=analysis_type,
            coherence=features.coherence if features and analysis_type.includes(AnalysisType.COHERENCE) else None,
            entropy=features.entropy if features and analysis_type.includes(AnalysisType.ENTROPY) else None,
            drift=context.get('drift'),
            resonance=context.get('resonance'),
            baseline_metrics=baseline.metrics if baseline else None,
            fingerprint=fingerprint,
            vocabulary_version=VOCABULARY_VERSION,
        )
        alerts: List[Alert] = context.get('alerts', [])

        persisted = self._persist(result, alerts) if self.persisting else False
        self._notify(alerts)

        logger.info(f"Analysis complete: confidence {result.confidence:.2f}, {len(alerts)} alert(s)")

        return AnalysisResponse(success=True, result=result, alerts=alerts, persisted=persisted)

    def process_dict(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        JSON-shaped entry point accepting camelCase request keys.

        Every error becomes {"success": False, "error": message}.
        """
        try:
            request = AnalysisRequest.from_dict(payload or {})
            return self.process(request).to_dict()
        except DriftEngineError as e:
            logger.error(f"Linguistic analysis failed: {e.message}")
            return AnalysisResponse.failure(e.message).to_dict()
        except Exception as e:
            logger.error(f"Linguistic analysis failed: {e}", exc_info=True)
            return AnalysisResponse.failure(str(e)).to_dict()

    def _is_duplicate(self, event_record: Dict[str, Any]) -> bool:
        try:
            event_id = self.store.register_sample(event_record)
        except DatabaseError as e:
            # Without the uniqueness check the sample is processed as new
            logger.error(f"Failed to register sample {event_record['content_hash'][:12]}: {e}")
            return False
        return event_id is None

    def _load_baseline(self, organization_id: str, unit_id: Optional[str]):
        if self.store is None:
            return None
        try:
            baseline = self.store.get_latest_baseline(organization_id, unit_id, self.config.baseline_type)
        except DatabaseError as e:
            logger.warning(f"Baseline lookup failed, drift unknown: {e}")
            return None
        if baseline is None:
            logger.info(f"No {self.config.baseline_type} baseline for org {organization_id}, unit {unit_id}")
        return baseline

    def _load_mission(self, organization_id: str) -> Optional[str]:
        if self.store is None:
            return None
        try:
            return self.store.get_mission_statement(organization_id)
        except DatabaseError as e:
            logger.warning(f"Mission statement lookup failed, using neutral resonance: {e}")
            return None

    def _persist(self, result: AnalysisResult, alerts: List[Alert]) -> bool:
        persisted = True
        try:
            self.store.store_analysis(result.to_record())
        except DatabaseError as e:
            logger.error(f"Error storing analysis: {e}")
            persisted = False

        for alert in alerts:
            try:
                alert.alert_id = self.store.store_alert(alert)
            except DatabaseError as e:
                logger.error(f"Error storing {alert.alert_type.value} alert: {e}")
                persisted = False

        return persisted

    def _notify(self, alerts: List[Alert]) -> None:
        if not alerts or self.notifier is None or not self.config.notify_alerts:
            return
        try:
            self.notifier.notify_alerts(alerts)
        except NotificationError as e:
            logger.warning(f"Alert notification failed: {e.message}")
