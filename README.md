# atractk

Building blocks for working with ATRAC audio:

- `atractk.fft` — `FFT(n, inverse=False)`, a mixed-radix complex FFT plan
  (unnormalised) with radix-2, 3, 4 and 5 butterflies and a generic one for
  other factors; `factorize(n)` returns the `(radix, remaining length)` stages
  of a plan, and `next_fast_size(n)` the smallest size `>= n` with no prime
  factors other than 2, 3 and 5.
- `atractk.mdct` — `Mdct(n, scale=1.0)` maps `n` samples to `n / 2`
  coefficients and `Midct(n, scale=None)` maps `n / 2` coefficients to `n`
  samples (the default scale is `n`). With `scale == n` both give the textbook
  cosine sums; other scales multiply the result by `scale / n`. `Dct4x16` is a
  16-point DCT-IV built on a 32-point `Midct`, and `calc_eps(magnitude)` gives
  a numerical tolerance for values of that magnitude.
- `atractk.bitstream` — `BitStream`, an MSB-first bit writer and reader for
  fields of 0 to 23 bits (`write`, `read`, `size_in_bits`, `buffer_size`,
  `to_bytes`); reading past the end raises `EOFError`. `make_sign(value, bits)`
  sign-extends a field.
- `atractk.oma` — OMA (EA3) containers holding ATRAC3 or ATRAC3plus frames:
  `OmaInfo` (with `bitrate()` and `codec_name()`), `Codec`, `ChannelFormat`,
  `HEADER_SIZE`, `encode_header`, `parse_header`, `OmaFile` and `open_oma`.
  Problems raise `OmaError`, whose `code` is one of `OmaError.IO`,
  `PERMISSION`, `FORMAT`, `ENCRYPTED`, `VALUE` or `EOF`.
- `atractk.usage` — `usage_text()`, the help text of an encoder front end.

## Installation

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Command-line tools

Show codec, bitrate, channel format and frame size of one or more OMA files
(files that cannot be opened are reported on stderr and make the exit status 1):

    atractk-omainfo first.oma second.oma

Copy an OMA file frame by frame into a new file with the same header
parameters:

    atractk-omacp input.oma output.oma

## Library examples

Run a block through the MDCT and the inverse MDCT:

    from atractk.mdct import Mdct, Midct

    forward = Mdct(256, 1.0)
    inverse = Midct(256, 512.0)
    spectrum = forward(samples)      # 256 input samples -> 128 coefficients
    output = inverse(spectrum)       # 128 coefficients -> 256 samples

The inverse transform alone does not restore the input; windowing and
overlap-add of neighbouring blocks are left to the caller.

Pack and unpack bit fields:

    from atractk.bitstream import BitStream, make_sign

    stream = BitStream()
    stream.write(5, 3)
    stream.write(make_sign(-2, 3), 3)
    assert stream.read(3) == 5
    assert make_sign(stream.read(3), 3) == -2

Inspect an OMA file and iterate over its frames:

    from atractk.oma import open_oma

    with open_oma("track.oma") as oma:
        print(oma.info.codec_name(), oma.info.bitrate())
        for frame in oma:
            ...  # each frame is oma.info.framesize bytes

## What this package does not do

It does not encode or decode audio: there is no ATRAC1 or ATRAC3 encoder or
decoder and no reading or writing of WAV or AEA files. `usage_text()` only
returns help text; no command in this package accepts the options it lists.
The OMA support reads and writes headers and raw frames only, and refuses
encrypted files.