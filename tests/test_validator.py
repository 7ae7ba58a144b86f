from __future__ import annotations

import pytest

from models.config import PipelineConfig
from models.errors import (
    EmptyResultError,
    InsufficientDataError,
    MissingColumnsError,
    NoTemperatureDataError,
    PipelineError,
)
from models.records import TemperatureObservation
from services.validator import Validator


@pytest.fixture()
def validator() -> Validator:
    return Validator(PipelineConfig())


def test_structure_check_uses_first_record_keys(validator: Validator) -> None:
    records = [
        {"monitoringlocationid": "A", "characteristicname": "x", "resultvalue": "1"},
        {"monitoringlocationid": "B"},
    ]

    validator.check_structure(records)


def test_structure_check_requires_records(validator: Validator) -> None:
    with pytest.raises(InsufficientDataError):
        validator.check_structure([])


def test_structure_check_lists_every_missing_column(validator: Validator) -> None:
    with pytest.raises(MissingColumnsError) as excinfo:
        validator.check_structure([{"other": "1"}])

    assert excinfo.value.missing == ("monitoringlocationid", "characteristicname", "resultvalue")


def test_result_checks_are_independent(validator: Validator) -> None:
    observation = TemperatureObservation(location_id="A", value=1.0)

    validator.check_observations([observation])
    with pytest.raises(NoTemperatureDataError):
        validator.check_observations([])

    validator.check_result({"A": 1.0})
    with pytest.raises(EmptyResultError):
        validator.check_result({})


def test_errors_expose_payload_for_callers() -> None:
    error = MissingColumnsError(["resultvalue"])

    assert isinstance(error, PipelineError)
    assert error.status_code == 400
    assert error.to_payload() == {
        "detail": "CSV must contain required columns: resultvalue",
        "kind": "missing_columns",
    }


def test_pipeline_config_normalizes_target_and_rejects_bad_limits() -> None:
    assert PipelineConfig(target_characteristic="  Temperature, Water ").target_characteristic == (
        "temperature, water"
    )
    with pytest.raises(ValueError):
        PipelineConfig(max_file_size_bytes=0)
    with pytest.raises(ValueError):
        PipelineConfig(decimal_places=-1)
