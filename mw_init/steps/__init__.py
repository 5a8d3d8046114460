from .context import InitCtx
from .step_10_detect_version import DetectVersionStep
from .step_20_ensure_secrets import EnsureSecretsStep
from .step_30_init_volumes import InitVolumesStep
from .step_40_read_previous_state import ReadPreviousStateStep
from .step_50_build_desired_state import BuildDesiredStateStep
from .step_60_remove_stale import RemoveStaleStep
from .step_70_sync_composer import SyncComposerStep
from .step_80_process_components import ProcessComponentsStep
from .step_90_generate_localsettings import GenerateLocalSettingsStep
from .step_95_database_update import DatabaseUpdateStep

__all__ = [
    "InitCtx",
    "DetectVersionStep",
    "EnsureSecretsStep",
    "InitVolumesStep",
    "ReadPreviousStateStep",
    "BuildDesiredStateStep",
    "RemoveStaleStep",
    "SyncComposerStep",
    "ProcessComponentsStep",
    "GenerateLocalSettingsStep",
    "DatabaseUpdateStep",
]
