"""
Binaural beat synthesis library for generating stereo PCM audio and WAV files.

This library builds two sine tones of slightly different frequency, one per ear,
and serializes them into a standard uncompressed WAV container for playback.

Key Concept - Loop-Matched Periods:
Each ear is rendered from a single seamless period of its own sine wave. The
period is then repeated to fill the channel, so the audio can be looped by a
player without clicks:
- Loop-count mode: both ears are cut to num_loops * (shorter period length)
- Duration mode: each ear holds as many whole periods as fit in the duration,
  and the stereo clip is clamped to the shorter of the two
- Example: 440 Hz + 4 Hz beat at 44100 Hz gives periods of 100 and 99 samples,
  so 10 loops yields 990 samples per ear

Channel order: index 0 is the "right" channel carrying the base frequency with
zero phase, index 1 is the "left" channel carrying frequency + beat with the
requested phase shift. Every stereo frame therefore starts with the base
frequency sample.
"""

import io
import logging
import math
import operator
import os
import struct
import tempfile
import types
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

# Configuration constants
SAMPLE_RATE = 44100           # CD quality sample rate
BIT_DEPTH = 16                # Default sample width in bits
SUPPORTED_BIT_DEPTHS = (8, 16, 32)
FILE_EXTENSION = ".wav"
HEADER_SIZE = 44              # Canonical PCM WAV header length in bytes

# Caduceus frequencies in Hz keyed by integer exponent [185, 201]
CADUCEUS_FREQUENCIES = types.MappingProxyType({
    185: 0.25109329,
    186: 0.406277478,
    187: 0.657370768,
    188: 1.063648245,
    189: 1.721019013,
    190: 2.784667259,
    191: 4.505686274,
    192: 7.290353535,
    193: 11.79603981,
    194: 19.08639335,
    195: 30.88242217,
    196: 49.96882653,
    197: 80.85125972,
    198: 130.8200863,
    199: 211.671346,
    200: 342.4914324,
    201: 554.1627785,
})

# Application defaults for user-entered parameters
DEFAULT_FREQUENCY = CADUCEUS_FREQUENCIES[196]
DEFAULT_BEAT = 1.0
DEFAULT_SHIFT = 180.0
LOOPED_SAMPLE_DURATION = 1.61803  # seconds
CUSTOM_CLIP_BASENAME = "custom"

_SAMPLE_DTYPES = {8: np.int8, 16: np.int16, 32: np.int32}
_WIRE_DTYPES = {8: '<i1', 16: '<i2', 32: '<i4'}  # Little-endian signed PCM


class BinauralError(Exception):
    """Base class for all errors raised by this library."""


class InvalidParameter(BinauralError, ValueError):
    """A frequency, duration, loop count, bit depth or buffer was rejected."""


class EncodingFailure(InvalidParameter):
    """Channel buffers and header fields cannot form a consistent WAV container."""


class IOFailure(BinauralError, OSError):
    """A container file could not be created or written."""


class LoadFailure(BinauralError):
    """The playback subsystem failed to load a container."""


class CleanupWarning(UserWarning):
    """A handed-off container file could not be deleted."""


@dataclass(frozen=True)
class GenerationRequest:
    """
    Parameters for one binaural clip.

    Exactly one of ``duration`` (seconds) or ``num_loops`` must be given.
    Instances compare field by field and serve as the cache key of
    ClipService.

    Args:
        frequency: Base frequency in Hz, played in the right ear
        beat: Beat frequency in Hz, added to the base for the left ear
        phase_shift_deg: Phase shift of the left ear in degrees
        duration: Clip length in seconds (duration mode)
        num_loops: Number of shared periods (loop-count mode)
    """
    frequency: float
    beat: float
    phase_shift_deg: float = 0.0
    duration: Optional[float] = None
    num_loops: Optional[int] = None

    def validate(self):
        """Raise InvalidParameter if this request cannot produce a clip."""
        if not self.frequency > 0:
            raise InvalidParameter(f"Frequency must be positive, got {self.frequency}")
        if not self.frequency + self.beat > 0:
            raise InvalidParameter(
                f"Left ear frequency (frequency + beat) must be positive, "
                f"got {self.frequency + self.beat}"
            )
        if not math.isfinite(self.phase_shift_deg):
            raise InvalidParameter(f"Phase shift must be finite, got {self.phase_shift_deg}")
        if (self.duration is None) == (self.num_loops is None):
            raise InvalidParameter("Specify exactly one of duration or num_loops")
        if self.num_loops is not None:
            _loop_count(self.num_loops)
        if self.duration is not None and not (self.duration > 0 and math.isfinite(self.duration)):
            raise InvalidParameter(f"Duration must be positive and finite, got {self.duration}")

    @classmethod
    def from_text(cls, frequency: str, beat: str, shift: str,
                  duration: Optional[str] = None) -> 'GenerationRequest':
        """
        Build a request from user-entered strings.

        Any value that does not parse as a number, or is not strictly
        positive, is replaced by its application default.
        """
        return cls(
            frequency=_parse_positive(frequency, DEFAULT_FREQUENCY),
            beat=_parse_positive(beat, DEFAULT_BEAT),
            phase_shift_deg=_parse_positive(shift, DEFAULT_SHIFT),
            duration=_parse_positive(duration, LOOPED_SAMPLE_DURATION),
        )


@dataclass(frozen=True, eq=False)
class AudioClip:
    """
    Synthesized PCM audio, one read-only buffer per channel.

    Args:
        sample_rate: Samples per second
        bit_depth: Bits per sample (8, 16 or 32)
        channel_buffers: Equal-length sample buffers (base frequency first)
        request: The request this clip was generated from, if any
    """
    sample_rate: int
    bit_depth: int
    channel_buffers: Tuple[np.ndarray, ...]
    request: Optional[GenerationRequest] = None

    def __post_init__(self):
        _check_bit_depth(self.bit_depth)
        if self.sample_rate <= 0:
            raise InvalidParameter(f"Sample rate must be positive, got {self.sample_rate}")
        if not self.channel_buffers:
            raise InvalidParameter("A clip needs at least one channel")
        lengths = {len(buffer) for buffer in self.channel_buffers}
        if len(lengths) != 1:
            raise InvalidParameter(f"All channels must have equal length, got {sorted(lengths)}")
        if 0 in lengths:
            raise InvalidParameter("Channels must not be empty")

        frozen = []
        for index, buffer in enumerate(self.channel_buffers):
            buffer = _checked_samples(index, buffer, self.bit_depth)
            if buffer.flags.writeable:
                buffer = buffer.copy()
                buffer.flags.writeable = False
            frozen.append(buffer)
        object.__setattr__(self, 'channel_buffers', tuple(frozen))

    @property
    def num_channels(self) -> int:
        return len(self.channel_buffers)

    @property
    def duration_samples(self) -> int:
        return len(self.channel_buffers[0])

    @property
    def duration_seconds(self) -> float:
        return self.duration_samples / self.sample_rate


# Waveform generation

def full_scale_amplitude(bit_depth: int) -> int:
    """Largest positive sample value for a signed bit depth, e.g. 32767 for 16 bits."""
    _check_bit_depth(bit_depth)
    return 2 ** (bit_depth - 1) - 1


def generate_period(frequency: float, sample_rate: int = SAMPLE_RATE,
                    phase_shift_deg: float = 0.0, bit_depth: int = BIT_DEPTH) -> np.ndarray:
    """
    Generate exactly one seamless period of a sine wave.

    The period holds floor(sample_rate / frequency) samples. Sample i is
    sin(2*pi*i/N + phase) scaled to full scale and truncated toward zero, so
    the last sample leads straight back into the first when repeated.

    Args:
        frequency: Frequency in Hz
        sample_rate: Sample rate in Hz
        phase_shift_deg: Phase shift in degrees
        bit_depth: Bits per sample (8, 16 or 32)

    Returns:
        Read-only integer array of length N
    """
    if not frequency > 0:
        raise InvalidParameter(f"Frequency must be positive, got {frequency}")
    amplitude = full_scale_amplitude(bit_depth)

    period_length = int(math.floor(sample_rate / frequency))
    if period_length == 0:
        raise InvalidParameter(
            f"Sample rate {sample_rate} Hz is too low for a {frequency} Hz period"
        )

    angles = 2.0 * np.pi * np.arange(period_length) / period_length
    samples = np.sin(angles + math.radians(phase_shift_deg)) * amplitude
    period = np.trunc(samples).astype(_SAMPLE_DTYPES[bit_depth])
    period.flags.writeable = False
    return period


# Channel buffer construction

def tile_period(period: np.ndarray, length: int) -> np.ndarray:
    """Repeat a period until it fills exactly ``length`` samples (index i -> i mod N)."""
    if len(period) == 0:
        raise InvalidParameter("Cannot tile an empty period")
    if length <= 0:
        raise InvalidParameter(f"Channel length must be positive, got {length}")

    cycles_needed = int(np.ceil(length / len(period)))
    channel = np.tile(period, cycles_needed)[:length]
    channel.flags.writeable = False
    return channel


def loop_channels(periods: Sequence[np.ndarray], num_loops: int) -> List[np.ndarray]:
    """
    Build equal-length channels of num_loops times the shortest period.

    Every channel repeats its own period, so each one stays phase continuous
    even where the longer periods are cut short at the end.
    """
    num_loops = _loop_count(num_loops)
    common_period_length = min(len(period) for period in periods)
    channel_length = num_loops * common_period_length
    return [tile_period(period, channel_length) for period in periods]


def duration_channels(periods: Sequence[np.ndarray], duration: float,
                      sample_rate: int = SAMPLE_RATE) -> List[np.ndarray]:
    """
    Build channels holding as many whole periods as fit in ``duration`` seconds.

    Channels may differ in length; callers needing stereo sync clamp them to
    the shortest result.
    """
    if not (duration > 0 and math.isfinite(duration)):
        raise InvalidParameter(f"Duration must be positive and finite, got {duration}")
    channel_length = int(math.floor(duration * sample_rate))

    channels = []
    for period in periods:
        repeats = channel_length // len(period)
        if repeats == 0:
            raise InvalidParameter(
                f"Duration {duration}s is shorter than one {len(period)}-sample period"
            )
        channels.append(tile_period(period, repeats * len(period)))
    return channels


# WAV encoding

def encode_wav(channel_buffers: Sequence[np.ndarray], sample_rate: int = SAMPLE_RATE,
               bit_depth: int = BIT_DEPTH) -> bytes:
    """
    Serialize one or more channels into a single PCM WAV container.

    Frames interleave one sample from each channel in channel order.

    Args:
        channel_buffers: Equal-length integer sample buffers
        sample_rate: Sample rate in Hz
        bit_depth: Bits per sample (8, 16 or 32)

    Returns:
        Complete WAV file contents (44-byte header followed by the data)
    """
    _check_bit_depth(bit_depth)
    if sample_rate <= 0:
        raise InvalidParameter(f"Sample rate must be positive, got {sample_rate}")
    if len(channel_buffers) == 0:
        raise InvalidParameter("At least one channel buffer is required")
    for index, buffer in enumerate(channel_buffers):
        if len(buffer) == 0:
            raise InvalidParameter(f"Channel {index} is empty")
    lengths = [len(buffer) for buffer in channel_buffers]
    if len(set(lengths)) != 1:
        raise EncodingFailure(f"Cannot interleave channels of different lengths: {lengths}")

    data = _pack_samples(channel_buffers, bit_depth)
    num_channels = len(channel_buffers)
    block_align = bit_depth // 8 * num_channels

    if len(data) != lengths[0] * block_align:
        raise EncodingFailure(
            f"Packed {len(data)} data bytes, expected {lengths[0] * block_align}"
        )
    if 36 + len(data) > 0xFFFFFFFF:
        raise EncodingFailure(f"{len(data)} data bytes do not fit a 32-bit RIFF size")

    f = io.BytesIO()
    # WAV header
    f.write(b'RIFF')
    f.write(struct.pack('<I', 36 + len(data)))  # ChunkSize
    f.write(b'WAVE')
    f.write(b'fmt ')
    f.write(struct.pack('<I', 16))  # Subchunk1Size
    f.write(struct.pack('<H', 1))   # AudioFormat (PCM)
    f.write(struct.pack('<H', num_channels))  # NumChannels
    f.write(struct.pack('<I', sample_rate))  # SampleRate
    f.write(struct.pack('<I', sample_rate * block_align))  # ByteRate
    f.write(struct.pack('<H', block_align))  # BlockAlign
    f.write(struct.pack('<H', bit_depth))  # BitsPerSample
    f.write(b'data')
    f.write(struct.pack('<I', len(data)))  # Subchunk2Size

    # Audio data
    f.write(data)

    wav = f.getvalue()
    if len(wav) != HEADER_SIZE + len(data):
        raise EncodingFailure(f"Container is {len(wav)} bytes, expected {HEADER_SIZE + len(data)}")
    return wav


def encode_mono_wavs(channel_buffers: Sequence[np.ndarray], sample_rate: int = SAMPLE_RATE,
                     bit_depth: int = BIT_DEPTH) -> List[bytes]:
    """Serialize each channel into its own single-channel container, for per-ear routing."""
    if len(channel_buffers) == 0:
        raise InvalidParameter("At least one channel buffer is required")
    _check_bit_depth(bit_depth)
    for index, buffer in enumerate(channel_buffers):
        if len(buffer) == 0:
            raise InvalidParameter(f"Channel {index} is empty")
    return [encode_wav([buffer], sample_rate, bit_depth) for buffer in channel_buffers]


def decode_wav(data: bytes) -> Tuple[List[np.ndarray], int, int]:
    """
    Read a PCM WAV container in the exact layout written by encode_wav.

    Returns:
        tuple: (channel_buffers, sample_rate, bit_depth)
    """
    if len(data) < HEADER_SIZE:
        raise EncodingFailure(f"Container is {len(data)} bytes, shorter than a WAV header")

    (riff, chunk_size, wave_tag, fmt_tag, fmt_size, audio_format, num_channels,
     sample_rate, byte_rate, block_align, bit_depth, data_tag,
     data_size) = struct.unpack('<4sI4s4sIHHIIHH4sI', data[:HEADER_SIZE])

    if (riff, wave_tag, fmt_tag, data_tag) != (b'RIFF', b'WAVE', b'fmt ', b'data'):
        raise EncodingFailure("Missing RIFF/WAVE/fmt /data chunk tags")
    if fmt_size != 16 or audio_format != 1:
        raise EncodingFailure(f"Not a plain PCM fmt chunk (size {fmt_size}, format {audio_format})")
    if bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise EncodingFailure(f"Unsupported bit depth {bit_depth}")
    if num_channels == 0 or block_align != bit_depth // 8 * num_channels:
        raise EncodingFailure(f"Block align {block_align} does not match {num_channels} channels")
    if byte_rate != sample_rate * block_align:
        raise EncodingFailure(f"Byte rate {byte_rate} does not match sample rate {sample_rate}")
    if chunk_size != 36 + data_size or len(data) != HEADER_SIZE + data_size:
        raise EncodingFailure(f"Declared sizes do not match a {len(data)}-byte container")
    if data_size == 0 or data_size % block_align != 0:
        raise EncodingFailure(f"Data size {data_size} is not a whole number of frames")

    frames = np.frombuffer(data, dtype=_WIRE_DTYPES[bit_depth], offset=HEADER_SIZE).reshape(-1, num_channels)
    channels = [frames[:, channel].astype(_SAMPLE_DTYPES[bit_depth]) for channel in range(num_channels)]
    return channels, sample_rate, bit_depth


# Clip service

class ClipService:
    """
    Generates binaural clips and writes them as WAV files.

    The last generated clip is cached and returned again, without
    recomputation, for a field-equal request. The cache is plain instance
    state with no locking: callers must serialize generate() calls, for
    example by running them on a single worker thread.
    """

    def __init__(self, sample_rate: int = SAMPLE_RATE, bit_depth: int = BIT_DEPTH,
                 cache_dir: Union[str, Path] = None):
        """
        Args:
            sample_rate: Sample rate in Hz for every generated clip
            bit_depth: Bits per sample (8, 16 or 32)
            cache_dir: Scratch directory for written files (default: system temp dir)
        """
        _check_bit_depth(bit_depth)
        if sample_rate <= 0:
            raise InvalidParameter(f"Sample rate must be positive, got {sample_rate}")
        self.sample_rate = sample_rate
        self.bit_depth = bit_depth
        self.cache_dir = Path(cache_dir) if cache_dir is not None else Path(tempfile.gettempdir())
        self._clip = None

    @property
    def cached_clip(self) -> Optional[AudioClip]:
        """The most recently generated clip, or None."""
        return self._clip

    def generate(self, request: GenerationRequest) -> AudioClip:
        """
        Generate the stereo clip for ``request``.

        Raises:
            InvalidParameter: if the request is rejected; the cached clip is kept
        """
        request.validate()

        if self._clip is not None and self._clip.request == request:
            logger.debug("Buffers already generated with the same parameters.")
            return self._clip

        right_period = generate_period(request.frequency, self.sample_rate, 0.0, self.bit_depth)
        left_period = generate_period(request.frequency + request.beat, self.sample_rate,
                                      request.phase_shift_deg, self.bit_depth)
        periods = [right_period, left_period]

        if request.num_loops is not None:
            channels = loop_channels(periods, request.num_loops)
        else:
            channels = duration_channels(periods, request.duration, self.sample_rate)
            shortest = min(len(channel) for channel in channels)
            channels = [channel[:shortest] for channel in channels]

        clip = AudioClip(self.sample_rate, self.bit_depth, tuple(channels), request)
        logger.debug("Generated %d samples per channel (periods %d/%d)",
                     clip.duration_samples, len(right_period), len(left_period))
        self._clip = clip
        return clip

    def generate_beat(self, frequency: float, beat: float, phase_shift_deg: float = 0.0,
                      duration: float = None, num_loops: int = None) -> AudioClip:
        """Generate a clip from plain parameters; see GenerationRequest."""
        return self.generate(GenerationRequest(frequency, beat, phase_shift_deg,
                                               duration=duration, num_loops=num_loops))

    def encode(self, clip: AudioClip, split_channels: bool = False) -> List[bytes]:
        """Encode a clip as one stereo container, or one mono container per channel."""
        if split_channels:
            return encode_mono_wavs(clip.channel_buffers, clip.sample_rate, clip.bit_depth)
        return [encode_wav(clip.channel_buffers, clip.sample_rate, clip.bit_depth)]

    def write(self, clip: AudioClip, basenames: Union[str, Sequence[str]]) -> List[Path]:
        """
        Write a clip into the scratch directory.

        One basename writes an interleaved container; one basename per channel
        writes a mono container for each ear, in channel order.

        Returns:
            list: Paths of the written files
        """
        if isinstance(basenames, str):
            basenames = [basenames]
        if len(basenames) == 1:
            blobs = self.encode(clip)
        elif len(basenames) == clip.num_channels:
            blobs = self.encode(clip, split_channels=True)
        else:
            raise InvalidParameter(
                f"Expected 1 or {clip.num_channels} basenames, got {len(basenames)}"
            )

        paths = []
        try:
            for basename, blob in zip(basenames, blobs):
                paths.append(_write_container(blob, basename, self.cache_dir))
        except IOFailure:
            for path in paths:
                path.unlink(missing_ok=True)
            raise
        return paths

    def clear(self):
        """Drop the cached clip."""
        self._clip = None


# Analysis and visualization

def analyze_clip(clip: AudioClip) -> Dict[str, object]:
    """
    Numerical analysis of a clip.

    Returns:
        dict: 'channels' (list of dicts with rms, peak, dominant_frequency,
        all relative to full scale) and 'beat' (difference between the first
        two dominant frequencies, or None for mono)
    """
    amplitude = full_scale_amplitude(clip.bit_depth)
    channels = []
    for buffer in clip.channel_buffers:
        samples = buffer.astype(np.float64) / amplitude
        fft_magnitude = np.abs(np.fft.rfft(samples))
        fft_magnitude[0] = 0.0  # Ignore DC
        freq_axis = np.fft.rfftfreq(len(samples), d=1.0 / clip.sample_rate)
        channels.append({
            'rms': float(np.sqrt(np.mean(samples ** 2))),
            'peak': float(np.max(np.abs(samples))),
            'dominant_frequency': float(freq_axis[np.argmax(fft_magnitude)]),
        })

    beat = None
    if len(channels) >= 2:
        beat = abs(channels[0]['dominant_frequency'] - channels[1]['dominant_frequency'])
    return {'channels': channels, 'beat': beat}


def visualize_clip(clip: AudioClip, milliseconds: float = 20.0, show: bool = True):
    """
    Plot the first milliseconds of every channel.

    Args:
        clip: The clip to plot
        milliseconds: Length of the plotted window
        show: Whether to display the plot immediately

    Returns:
        tuple: (figure, axes) matplotlib objects for further customization
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for visualization. Install with: pip install matplotlib")

    window = max(1, min(clip.duration_samples, int(clip.sample_rate * milliseconds / 1000.0)))
    time_axis = np.arange(window) * 1000.0 / clip.sample_rate
    amplitude = full_scale_amplitude(clip.bit_depth)

    fig, ax = plt.subplots(1, 1, figsize=(12, 4))
    names = ['Right', 'Left'] if clip.num_channels == 2 else [f'Channel {i}' for i in range(clip.num_channels)]
    for name, buffer in zip(names, clip.channel_buffers):
        ax.plot(time_axis, buffer[:window] / amplitude, linewidth=1.5, label=name)
    ax.set_xlabel('Time (ms)')
    ax.set_ylabel('Amplitude')
    ax.set_title(f'{clip.num_channels}-channel clip, {clip.sample_rate} Hz, {clip.bit_depth}-bit')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right')

    plt.tight_layout()

    if show:
        plt.show()

    return fig, ax


# Helper functions

def _check_bit_depth(bit_depth: int):
    if bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise InvalidParameter(f"Bit depth must be one of {SUPPORTED_BIT_DEPTHS}, got {bit_depth}")


def _loop_count(num_loops) -> int:
    """Return ``num_loops`` as a positive int; floats and bools are rejected."""
    if isinstance(num_loops, bool):
        raise InvalidParameter(f"Number of loops must be an integer, got {num_loops!r}")
    try:
        num_loops = operator.index(num_loops)
    except TypeError:
        raise InvalidParameter(f"Number of loops must be an integer, got {num_loops!r}") from None
    if num_loops <= 0:
        raise InvalidParameter(f"Number of loops must be positive, got {num_loops}")
    return num_loops


def _parse_positive(text: Optional[str], default: float) -> float:
    """Parse a strictly positive number, falling back to ``default``."""
    try:
        value = float(text)
    except (TypeError, ValueError):
        return default
    if not value > 0 or not math.isfinite(value):
        return default
    return value


def _checked_samples(index: int, buffer, bit_depth: int, error=InvalidParameter) -> np.ndarray:
    """Return ``buffer`` as the sample dtype, raising ``error`` instead of casting lossily."""
    dtype = _SAMPLE_DTYPES[bit_depth]
    info = np.iinfo(dtype)
    buffer = np.asarray(buffer)
    if buffer.ndim != 1 or not np.issubdtype(buffer.dtype, np.integer):
        raise error(f"Channel {index} is not a one-dimensional integer buffer")
    if len(buffer) and (buffer.min() < info.min or buffer.max() > info.max):
        raise error(f"Channel {index} has samples outside the {bit_depth}-bit range")
    return buffer.astype(dtype, copy=False)


def _pack_samples(channel_buffers: Sequence[np.ndarray], bit_depth: int) -> bytes:
    """Interleave channels into little-endian signed samples."""
    columns = [_checked_samples(index, buffer, bit_depth, EncodingFailure)
               for index, buffer in enumerate(channel_buffers)]
    frames = np.column_stack(columns).astype(_WIRE_DTYPES[bit_depth])
    return frames.tobytes()


def _write_container(blob: bytes, basename: str, directory: Path) -> Path:
    """Write a container to a unique file; nothing is left behind on failure."""
    try:
        fd, name = tempfile.mkstemp(prefix=basename, suffix=FILE_EXTENSION, dir=directory)
    except OSError as e:
        raise IOFailure(f"Error creating cache file \"{basename}{FILE_EXTENSION}\": {e}") from e

    path = Path(name)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(blob)
    except OSError as e:
        path.unlink(missing_ok=True)
        raise IOFailure(f"Error writing cache file \"{path}\": {e}") from e

    logger.info("Created cache file \"%s\".", path)
    return path
