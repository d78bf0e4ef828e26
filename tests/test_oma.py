import pytest

from atractk.oma import (
    HEADER_SIZE,
    ChannelFormat,
    Codec,
    OmaError,
    OmaFile,
    OmaInfo,
    encode_header,
    open_oma,
    parse_header,
)

LP2 = OmaInfo(Codec.ATRAC3, 384, 44100, ChannelFormat.STEREO)


def test_header_fixed_bytes():
    header = encode_header(LP2)
    assert len(header) == HEADER_SIZE
    assert header[0:3] == b"EA3"
    assert header[3] == 1
    assert header[4] == 0
    assert header[5] == 96
    assert header[6:8] == b"\xff\xff"


def test_atrac3_params_layout():
    info = OmaInfo(Codec.ATRAC3, 384, 44100, ChannelFormat.STEREO_JS)
    params = int.from_bytes(encode_header(info)[32:36], "big")
    assert params >> 24 == Codec.ATRAC3
    assert (params >> 17) & 1 == 1
    assert (params >> 13) & 7 == 1
    assert params & 0x3FF == 384 // 8


@pytest.mark.parametrize("fmt", [ChannelFormat.STEREO, ChannelFormat.STEREO_JS])
@pytest.mark.parametrize("rate", [32000, 44100, 48000, 88200, 96000])
def test_atrac3_round_trip(fmt, rate):
    info = OmaInfo(Codec.ATRAC3, 192, rate, fmt)
    assert parse_header(encode_header(info)) == info


@pytest.mark.parametrize(
    "fmt",
    [
        ChannelFormat.MONO,
        ChannelFormat.STEREO,
        ChannelFormat.CH3,
        ChannelFormat.CH4,
        ChannelFormat.CH6,
        ChannelFormat.CH7,
        ChannelFormat.CH8,
    ],
)
def test_atrac3plus_round_trip(fmt):
    info = OmaInfo(Codec.ATRAC3PLUS, 2048, 44100, fmt)
    assert parse_header(encode_header(info)) == info


def test_atrac3plus_rejects_joint_stereo():
    info = OmaInfo(Codec.ATRAC3PLUS, 2048, 44100, ChannelFormat.STEREO_JS)
    with pytest.raises(OmaError) as exc:
        encode_header(info)
    assert exc.value.code == OmaError.VALUE


def test_atrac3_rejects_mono():
    with pytest.raises(OmaError) as exc:
        encode_header(OmaInfo(Codec.ATRAC3, 384, 44100, ChannelFormat.MONO))
    assert exc.value.code == OmaError.VALUE


@pytest.mark.parametrize("rate", [0, -1, 22050])
def test_unsupported_samplerate(rate):
    with pytest.raises(OmaError) as exc:
        encode_header(OmaInfo(Codec.ATRAC3, 384, rate, ChannelFormat.STEREO))
    assert exc.value.code == OmaError.VALUE


def test_frame_size_too_large():
    with pytest.raises(OmaError):
        encode_header(OmaInfo(Codec.ATRAC3, (0x3FF + 1) * 8, 44100, ChannelFormat.STEREO))


def test_unwritable_codec():
    with pytest.raises(OmaError) as exc:
        encode_header(OmaInfo(Codec.MP3, 384, 44100, ChannelFormat.STEREO))
    assert exc.value.code == OmaError.VALUE


def test_short_header():
    with pytest.raises(OmaError) as exc:
        parse_header(encode_header(LP2)[:50])
    assert exc.value.code == OmaError.FORMAT


def test_bad_magic():
    header = bytearray(encode_header(LP2))
    header[0:3] = b"XYZ"
    with pytest.raises(OmaError) as exc:
        parse_header(bytes(header))
    assert exc.value.code == OmaError.FORMAT


def test_encrypted_header():
    header = bytearray(encode_header(LP2))
    header[6] = 0
    with pytest.raises(OmaError) as exc:
        parse_header(bytes(header))
    assert exc.value.code == OmaError.ENCRYPTED


def test_unknown_codec_in_header():
    header = bytearray(encode_header(LP2))
    header[32] = Codec.LPCM
    with pytest.raises(OmaError) as exc:
        parse_header(bytes(header))
    assert exc.value.code == OmaError.FORMAT


def test_bitrate_lp2():
    assert LP2.bitrate() == 132300


def test_bitrate_unknown_codec():
    with pytest.raises(OmaError):
        OmaInfo(Codec.LPCM, 384, 44100, ChannelFormat.STEREO).bitrate()


def test_codec_names():
    assert LP2.codec_name() == "ATRAC3"
    assert OmaInfo(Codec.ATRAC3PLUS, 2048, 44100, ChannelFormat.MONO).codec_name() == "ATRAC3PLUS"
    assert OmaInfo(Codec.MP3, 0, 44100, ChannelFormat.MONO).codec_name() == "MPEG1LAYER3"
    assert OmaInfo(9, 0, 44100, ChannelFormat.MONO).codec_name() == ""


def test_file_round_trip(tmp_path):
    path = tmp_path / "a.oma"
    frames = [bytes([i]) * LP2.framesize for i in range(3)]
    with open_oma(path, "w", LP2) as out:
        assert out.write(b"".join(frames[:2])) == 2
        assert out.write(frames[2]) == 1
    assert path.stat().st_size == HEADER_SIZE + 3 * LP2.framesize

    with OmaFile(path) as src:
        assert src.info == LP2
        assert list(src) == frames
        assert src.read(1) == b""


def test_read_several_blocks_and_partial(tmp_path):
    path = tmp_path / "b.oma"
    with open_oma(path, "w", LP2) as out:
        out.write(bytes(LP2.framesize * 3))
    with open_oma(path) as src:
        assert len(src.read(2)) == 2 * LP2.framesize
        assert src.read(2) == b""


def test_write_partial_frame_rejected(tmp_path):
    with open_oma(tmp_path / "c.oma", "w", LP2) as out:
        with pytest.raises(OmaError) as exc:
            out.write(b"\0" * (LP2.framesize + 1))
    assert exc.value.code == OmaError.VALUE


def test_write_mode_needs_info(tmp_path):
    with pytest.raises(OmaError) as exc:
        OmaFile(tmp_path / "d.oma", "w")
    assert exc.value.code == OmaError.VALUE


def test_open_missing_file(tmp_path):
    with pytest.raises(OmaError) as exc:
        open_oma(tmp_path / "missing.oma")
    assert exc.value.code == OmaError.IO


def test_open_non_oma_file(tmp_path):
    path = tmp_path / "e.oma"
    path.write_bytes(b"RIFF" + bytes(200))
    with pytest.raises(OmaError) as exc:
        open_oma(path)
    assert exc.value.code == OmaError.FORMAT


def test_read_on_writer_rejected(tmp_path):
    with open_oma(tmp_path / "f.oma", "w", LP2) as out:
        with pytest.raises(OmaError):
            out.read(1)


def test_bad_mode(tmp_path):
    with pytest.raises(ValueError):
        OmaFile(tmp_path / "g.oma", "a", LP2)