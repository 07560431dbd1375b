"""
Pitch shifting by nearest-neighbor resampling.

The output index is multiplied by the pitch factor and truncated to pick
the source sample. There is no interpolation: factors above 1 skip input
samples (higher, shorter), factors below 1 repeat them (lower, slower).
Source indices past the end of the input produce silence.
"""

import numpy as np

# Fixed output gain applied to every resampled sample
OUTPUT_GAIN = 0.8


def resample_nearest(
    audio: np.ndarray,
    output_frames: int,
    pitch_factor: float,
    gain: float = OUTPUT_GAIN
) -> np.ndarray:
    """
    Resample each channel with nearest-neighbor index mapping.

    Args:
        audio: Input audio shaped (channels, frames)
        output_frames: Number of frames to produce per channel
        pitch_factor: Source index multiplier (>0)
        gain: Linear gain applied to copied samples

    Returns:
        New array shaped (channels, output_frames)
    """
    input_frames = audio.shape[1]
    source_index = np.floor(np.arange(output_frames) * pitch_factor).astype(np.int64)
    in_range = source_index < input_frames

    output = np.zeros((audio.shape[0], output_frames), dtype=np.float64)
    output[:, in_range] = audio[:, source_index[in_range]] * gain

    return output
