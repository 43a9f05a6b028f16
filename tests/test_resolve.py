from meteofusion.pipeline.resolve import ModelFields, resolve


def _fields() -> ModelFields:
    return ModelFields(
        time=("2024-01-01T00:00", "2024-01-01T01:00"),
        columns={
            "temperature_2m_best_match": [None, 2.0],
            "temperature_2m_meteofrance_seamless": [1.5, 3.0],
            "temperature_2m": [9.9, 9.9],
            "cloud_cover": [40, None],
        },
    )


def test_resolve_walks_priority_list():
    fields = _fields()
    priority = ("best_match", "meteofrance_seamless")
    assert resolve(fields, "temperature_2m", 0, priority) == 1.5
    assert resolve(fields, "temperature_2m", 1, priority) == 2.0


def test_resolve_falls_back_to_unqualified_then_none():
    fields = _fields()
    assert resolve(fields, "temperature_2m", 0, ("icon_d2",)) == 9.9
    assert resolve(fields, "cloud_cover", 0, ("best_match",)) == 40
    assert resolve(fields, "cloud_cover", 1, ("best_match",)) is None
    assert resolve(fields, "wind_speed_10m", 0, ("best_match",)) is None


def test_resolve_ignores_short_columns():
    fields = ModelFields(time=("a", "b"), columns={"rain_best_match": [0.1]})
    assert resolve(fields, "rain", 1, ("best_match",)) is None


def test_model_fields_from_payload_requires_time_axis():
    assert ModelFields.from_payload(None) is None
    assert ModelFields.from_payload({"hourly": {}}) is None
    fields = ModelFields.from_payload({"hourly": {"time": ["t0"], "rain": [0.0]}})
    assert fields is not None
    assert len(fields) == 1
