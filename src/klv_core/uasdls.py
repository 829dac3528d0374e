"""MISB ST 0601 UAS Datalink Local Set, as an example KLV schema.

Reference: MISB ST 0601.8. Pair it with :class:`~klv_core.checksum.MisbBcc`.
"""
from __future__ import annotations

from datetime import datetime

from .converters import I16, I32, STR, TIMESTAMP_MICRO, U8, U16, U32
from .keys import key_from_hex
from .schema import klv_field, klv_record

UAS_LS_KEY = key_from_hex("06.0E.2B.34.02.0B.01.01.0E.01.03.01.01.00.00.00")


@klv_record(UAS_LS_KEY)
class UASDatalinkLS:
    timestamp: datetime = klv_field(2, TIMESTAMP_MICRO)
    # 0..(2^16-1) maps to 0..360 degrees
    platform_heading_angle: int = klv_field(5, U16)
    # +/-(2^15-1) maps to +/-20 degrees; -(2^15) means out of range
    platform_pitch_angle: int = klv_field(6, I16)
    # +/-(2^15-1) maps to +/-50 degrees
    platform_roll_angle: int = klv_field(7, I16)
    ls_version_number: int = klv_field(65, U8)

    image_source_sensor: str | None = klv_field(11, STR, optional=True)
    image_coordinate_system: str | None = klv_field(12, STR, optional=True)
    sensor_latitude: int | None = klv_field(13, I32, optional=True)
    sensor_longitude: int | None = klv_field(14, I32, optional=True)
    sensor_true_altitude: int | None = klv_field(15, U16, optional=True)
    sensor_horizontal_fov: int | None = klv_field(16, U16, optional=True)
    sensor_vertical_fov: int | None = klv_field(17, U16, optional=True)
    sensor_relative_azimuth_angle: int | None = klv_field(18, U32, optional=True)
    sensor_relative_elevation_angle: int | None = klv_field(19, I32, optional=True)
    sensor_relative_roll_angle: int | None = klv_field(20, I32, optional=True)
    slant_range: int | None = klv_field(21, U32, optional=True)
    # ST 0601.8 says 2 bytes; recorded streams carry 4
    target_width: int | None = klv_field(22, U32, optional=True)
    frame_center_latitude: int | None = klv_field(23, I32, optional=True)
    frame_center_longitude: int | None = klv_field(24, I32, optional=True)
    frame_center_elevation: int | None = klv_field(25, U16, optional=True)
    target_location_latitude: int | None = klv_field(40, I32, optional=True)
    target_location_longitude: int | None = klv_field(41, I32, optional=True)
    target_location_elevation: int | None = klv_field(42, U16, optional=True)
    platform_ground_speed: int | None = klv_field(56, U8, optional=True)
    ground_range: int | None = klv_field(57, U32, optional=True)
