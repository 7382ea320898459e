# Services package initialization
from .repair_service import PipelineResult, RepairService, default_snapshot_path, run_pipeline
