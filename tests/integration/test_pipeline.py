import pytest

from core.analysis import AnalysisStage, build_default_pipeline
from core.exceptions import PipelineStageError
from core.models.analysis import AnalysisType


class ExplodingStage(AnalysisStage):
    def get_dependencies(self):
        return ["FeatureStage"]

    def process(self, context):
        raise RuntimeError("boom")


def test_default_pipeline_orders_stages_by_dependency():
    pipeline = build_default_pipeline()

    order = pipeline.stage_order
    assert order.index("AnonymizationStage") < order.index("FeatureStage") < order.index("DriftStage")
    assert order.index("DriftStage") < order.index("AlertStage")
    assert order.index("ResonanceStage") < order.index("AlertStage")


def test_pipeline_anonymizes_when_caller_did_not(mission):
    context = build_default_pipeline().run(
        "Jane Doe says we will improve.",
        {"analysis_type": AnalysisType.FULL, "mission_statement": mission, "organization_id": "org-1"},
    )

    assert context["anonymized_text"] == "[PERSON] says we will improve."
    assert context["pipeline_completed"] is True
    assert context["drift"].confidence == 0.1
    assert context["resonance"].confidence > 0
    assert isinstance(context["alerts"], list)


def test_resonance_only_run_skips_feature_and_drift_stages(mission):
    context = build_default_pipeline().run(
        "customers innovation", {"analysis_type": AnalysisType.RESONANCE, "mission_statement": mission},
    )

    assert "features" not in context
    assert "drift" not in context
    assert "resonance" in context


def test_stage_failure_aborts_the_run():
    pipeline = build_default_pipeline().add_stage(ExplodingStage())

    with pytest.raises(PipelineStageError) as excinfo:
        pipeline.run("We will grow.", {"analysis_type": AnalysisType.FULL})

    assert "ExplodingStage" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_removed_stage_is_not_run():
    pipeline = build_default_pipeline().remove_stage("AlertStage")
    context = pipeline.run("We will grow.", {"analysis_type": AnalysisType.FULL})

    assert "alerts" not in context
    assert "AlertStage" not in pipeline.get_stage_info()
