from .stream import (
    DEFAULT_AUDIO_LABEL,
    AudioProbe,
    EmbeddedConfig,
    LandingPage,
    MediaType,
    StreamDescriptor,
    StreamRequest,
    default_audio_probe,
)

__all__ = [
    "DEFAULT_AUDIO_LABEL",
    "AudioProbe",
    "EmbeddedConfig",
    "LandingPage",
    "MediaType",
    "StreamDescriptor",
    "StreamRequest",
    "default_audio_probe",
]
