from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union


# ------------------------------------------------------------
# Codec arguments
# ------------------------------------------------------------

@dataclass(frozen=True)
class MelodyCodecArgs:
    min_pitch: int
    max_pitch: int
    num_steps: Optional[int] = None
    num_segments: Optional[int] = None


@dataclass(frozen=True)
class DrumsCodecArgs:
    # None -> DEFAULT_DRUM_PITCH_CLASSES
    pitch_classes: Optional[Sequence[Sequence[int]]] = None
    num_steps: Optional[int] = None
    num_segments: Optional[int] = None


@dataclass(frozen=True)
class TrioCodecArgs:
    mel_args: MelodyCodecArgs
    bass_args: MelodyCodecArgs
    drums_args: DrumsCodecArgs = field(default_factory=DrumsCodecArgs)
    num_steps: Optional[int] = None
    num_segments: Optional[int] = None


# ------------------------------------------------------------
# Registry
# ------------------------------------------------------------

class CodecKind(str, Enum):
    MELODY = "melody"
    DRUMS_ROLL = "drumsRoll"
    DRUMS_RAW_ROLL = "drumsRawRoll"
    DRUMS_ONE_HOT = "drumsOneHot"
    TRIO = "trio"


CodecArgs = Union[MelodyCodecArgs, DrumsCodecArgs, TrioCodecArgs]


@dataclass(frozen=True)
class CodecSpec:
    kind: CodecKind
    args: CodecArgs


def coerce_args(cls, value):
    """
    Accepts an args dataclass or a plain mapping (e.g. parsed JSON) and
    returns an instance of `cls`. Unknown keys raise TypeError.
    """
    if isinstance(value, cls):
        return value
    if value is None:
        value = {}
    if not isinstance(value, Mapping):
        raise TypeError(f'Expected {cls.__name__} or mapping, got {type(value).__name__}')

    kwargs: Dict[str, Any] = dict(value)
    names = {f.name for f in fields(cls)}
    unknown = set(kwargs) - names
    if unknown:
        raise TypeError(f'Unknown {cls.__name__} fields: {sorted(unknown)}')

    if cls is TrioCodecArgs:
        kwargs['mel_args'] = coerce_args(MelodyCodecArgs, kwargs.get('mel_args'))
        kwargs['bass_args'] = coerce_args(MelodyCodecArgs, kwargs.get('bass_args'))
        kwargs['drums_args'] = coerce_args(DrumsCodecArgs, kwargs.get('drums_args'))
    return cls(**kwargs)
