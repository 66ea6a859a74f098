"""
Создание кодека по конфигурации вида {"kind": ..., "args": {...}}.
"""
import logging
from typing import Mapping, Union

from note_codec.codec_utils import Codec
from note_codec.config import (CodecKind, CodecSpec, DrumsCodecArgs, MelodyCodecArgs,
                               TrioCodecArgs, coerce_args)
from note_codec.drums_utils import DrumsCodec, DrumsDecodeMode, DrumsOneHotCodec
from note_codec.errors import UnknownCodecKindError
from note_codec.melody_utils import MelodyCodec
from note_codec.trio_utils import TrioCodec

logger = logging.getLogger(__name__)

# старые имена классов-конвертеров
KIND_ALIASES = {
    'MelodyConverter': CodecKind.MELODY,
    'DrumsConverter': CodecKind.DRUMS_ROLL,
    'DrumRollConverter': CodecKind.DRUMS_RAW_ROLL,
    'DrumsOneHotConverter': CodecKind.DRUMS_ONE_HOT,
    'TrioConverter': CodecKind.TRIO,
}

ARGS_TYPES = {
    CodecKind.MELODY: MelodyCodecArgs,
    CodecKind.DRUMS_ROLL: DrumsCodecArgs,
    CodecKind.DRUMS_RAW_ROLL: DrumsCodecArgs,
    CodecKind.DRUMS_ONE_HOT: DrumsCodecArgs,
    CodecKind.TRIO: TrioCodecArgs,
}


def parse_kind(kind) -> CodecKind:
    if isinstance(kind, CodecKind):
        return kind
    if not isinstance(kind, str):
        raise UnknownCodecKindError(kind)
    if kind in KIND_ALIASES:
        return KIND_ALIASES[kind]
    try:
        return CodecKind(kind)
    except ValueError:
        raise UnknownCodecKindError(kind) from None


def parse_spec(spec: Union[CodecSpec, Mapping]) -> CodecSpec:
    """
    spec: CodecSpec or mapping with "kind" (or legacy "type") and "args".
    Args are validated against the dataclass for that kind.
    """
    if isinstance(spec, CodecSpec):
        kind, args = parse_kind(spec.kind), spec.args
    else:
        kind = parse_kind(spec.get('kind', spec.get('type')))
        args = spec.get('args')
    return CodecSpec(kind=kind, args=coerce_args(ARGS_TYPES[kind], args))


def codec_from_spec(spec: Union[CodecSpec, Mapping]) -> Codec:
    spec = parse_spec(spec)
    args = spec.args
    logger.debug("Building %s codec from %s", spec.kind.value, args)

    if spec.kind is CodecKind.MELODY:
        return MelodyCodec(min_pitch=args.min_pitch, max_pitch=args.max_pitch,
                           num_steps=args.num_steps, num_segments=args.num_segments)
    if spec.kind is CodecKind.DRUMS_ROLL:
        return DrumsCodec(pitch_classes=args.pitch_classes, decode_mode=DrumsDecodeMode.LABELED,
                          num_steps=args.num_steps, num_segments=args.num_segments)
    if spec.kind is CodecKind.DRUMS_RAW_ROLL:
        return DrumsCodec(pitch_classes=args.pitch_classes, decode_mode=DrumsDecodeMode.RAW,
                          num_steps=args.num_steps, num_segments=args.num_segments)
    if spec.kind is CodecKind.DRUMS_ONE_HOT:
        return DrumsOneHotCodec(pitch_classes=args.pitch_classes,
                                num_steps=args.num_steps, num_segments=args.num_segments)
    return TrioCodec(mel_args=args.mel_args, bass_args=args.bass_args, drums_args=args.drums_args,
                     num_steps=args.num_steps, num_segments=args.num_segments)
