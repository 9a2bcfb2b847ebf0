"""Enumerations for the vehicle tax estimator."""

from enum import StrEnum


class VehicleCategory(StrEnum):
    CAR = "Car"
    MOTORCYCLE = "Motorcycle"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS: dict[VehicleCategory, str] = {
    VehicleCategory.CAR: "Motor Car / Jeep / Omni",
    VehicleCategory.MOTORCYCLE: "Motorcycle / Two-Wheeler",
}
