from .config import AppConfig, RenderConfig, get_settings, reload_settings
from .domain import CueEntry, ProcessedCue
from .engine import CueAnimationEngine, FrameState, VolumeSampleBuffer
from .utils.cue_io import CueFormatError, load_cues, load_volume_buffer
