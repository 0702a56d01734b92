from typing import Any, List

from obd_sampler.data_processing.exceptions import InvalidSampleRateError
from obd_sampler.data_processing.models import ConsolidatedDataset, SampledDataset


def validate_sample_rate(value: Any) -> int:
    """
    Return the stride as an int, rejecting anything that is not a positive integer.
    Digit strings (GUI entry, CLI) are accepted.
    """
    if isinstance(value, bool):
        raise InvalidSampleRateError(f"Sample rate must be a positive integer, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text.lstrip("+-").isdecimal():
            raise InvalidSampleRateError(f"Sample rate must be a positive integer, got {value!r}")
        value = int(text)
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidSampleRateError(f"Sample rate must be a positive integer, got {value!r}")
        value = int(value)
    elif not isinstance(value, int):
        raise InvalidSampleRateError(f"Sample rate must be a positive integer, got {value!r}")

    if value < 1:
        raise InvalidSampleRateError(f"Sample rate must be at least 1, got {value}")
    return value


def sample_rows(rows: List[str], stride: int) -> List[str]:
    """Keep the rows whose index is divisible by stride."""
    stride = validate_sample_rate(stride)
    return rows[::stride]


class Sampler:
    """Reduces a consolidated dataset by a stride."""

    def __init__(self, stride: int):
        self.stride = validate_sample_rate(stride)

    def sample(self, dataset: ConsolidatedDataset) -> SampledDataset:
        rows = sample_rows(dataset.rows, self.stride)
        print(f"[PIPELINE] Sampled 1 out of every {self.stride}: {len(dataset.rows)} -> {len(rows)} rows")
        return SampledDataset(header_line=dataset.header_line, rows=rows, stride=self.stride)
