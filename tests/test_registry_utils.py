import pytest

from note_codec.config import CodecKind, CodecSpec, MelodyCodecArgs, TrioCodecArgs
from note_codec.drums_utils import DrumsCodec, DrumsDecodeMode, DrumsOneHotCodec
from note_codec.errors import CodecError, UnknownCodecKindError
from note_codec.melody_utils import MelodyCodec
from note_codec.registry_utils import codec_from_spec
from note_codec.trio_utils import TrioCodec


def test_melody_from_mapping():
    codec = codec_from_spec({'kind': 'melody', 'args': {'min_pitch': 21, 'max_pitch': 108, 'num_steps': 32}})
    assert isinstance(codec, MelodyCodec)
    assert codec.depth == 90
    assert codec.num_steps == 32


@pytest.mark.parametrize("kind, mode", [
    ('drumsRoll', DrumsDecodeMode.LABELED),
    ('drumsRawRoll', DrumsDecodeMode.RAW),
])
def test_drum_roll_kinds(kind, mode):
    codec = codec_from_spec({'kind': kind, 'args': {'pitch_classes': [[36], [38]]}})
    assert isinstance(codec, DrumsCodec)
    assert codec.decode_mode is mode
    assert codec.depth == 2


def test_drums_one_hot_defaults_to_nine_classes():
    codec = codec_from_spec({'kind': 'drumsOneHot', 'args': {}})
    assert isinstance(codec, DrumsOneHotCodec)
    assert codec.depth == 512


def test_trio_from_nested_mapping():
    codec = codec_from_spec({
        'kind': 'trio',
        'args': {
            'mel_args': {'min_pitch': 21, 'max_pitch': 108},
            'bass_args': {'min_pitch': 21, 'max_pitch': 108},
            'drums_args': {},
            'num_steps': 32,
        },
    })
    assert isinstance(codec, TrioCodec)
    assert codec.depth == 90 + 90 + 512
    assert codec.bass_codec.num_steps == 32


def test_codec_spec_object():
    spec = CodecSpec(kind=CodecKind.TRIO,
                     args=TrioCodecArgs(mel_args=MelodyCodecArgs(60, 72),
                                        bass_args=MelodyCodecArgs(33, 48),
                                        num_steps=4))
    assert isinstance(codec_from_spec(spec), TrioCodec)


def test_legacy_type_names():
    codec = codec_from_spec({'type': 'DrumRollConverter', 'args': {}})
    assert codec.decode_mode is DrumsDecodeMode.RAW
    assert isinstance(codec_from_spec({'type': 'MelodyConverter',
                                       'args': {'min_pitch': 0, 'max_pitch': 127}}), MelodyCodec)


def test_unknown_kind():
    with pytest.raises(UnknownCodecKindError) as exc:
        codec_from_spec({'kind': 'chords', 'args': {}})
    assert exc.value.kind == 'chords'
    assert isinstance(exc.value, CodecError)


def test_missing_kind():
    with pytest.raises(UnknownCodecKindError):
        codec_from_spec({'args': {}})


def test_unknown_argument_rejected():
    with pytest.raises(TypeError):
        codec_from_spec({'kind': 'melody', 'args': {'min_pitch': 0, 'max_pitch': 1, 'pitch_classes': []}})


@pytest.mark.parametrize("kind", [['melody'], {'name': 'melody'}, 3])
def test_non_string_kind(kind):
    with pytest.raises(UnknownCodecKindError):
        codec_from_spec({'kind': kind, 'args': {}})
