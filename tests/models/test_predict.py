"""Tests for single-trip scoring."""

import math

import numpy as np
import pytest

from taxifare.data import FarePrediction, TripRecord
from taxifare.errors import IncompleteRecord, SchemaMismatch
from taxifare.models import PredictionEngine, predict


def test_predict_from_mapping(trained_model, sample_trip):
    result = predict(trained_model, sample_trip)
    assert isinstance(result, FarePrediction)
    assert math.isfinite(result.fare_amount)


def test_predict_from_record_matches_mapping(trained_model, sample_trip):
    record = TripRecord(**sample_trip)
    assert predict(trained_model, record) == predict(trained_model, sample_trip)


def test_fare_amount_is_ignored(trained_model, sample_trip):
    """The label is only a placeholder when scoring."""
    with_label = predict(trained_model, {**sample_trip, "fare_amount": 999.0})
    assert with_label == predict(trained_model, sample_trip)


def test_matches_table_scoring(trained_model, trips_df):
    row = trips_df.iloc[3].to_dict()
    expected = trained_model.predict(trips_df.iloc[[3]])[0]
    assert np.isclose(predict(trained_model, row).fare_amount, expected)


def test_unseen_category_scores(trained_model, sample_trip):
    result = predict(trained_model, {**sample_trip, "vendor_id": "NEW"})
    assert math.isfinite(result.fare_amount)


@pytest.mark.parametrize("field", ["vendor_id", "trip_distance", "payment_type"])
def test_missing_field(trained_model, sample_trip, field):
    trip = {k: v for k, v in sample_trip.items() if k != field}
    with pytest.raises(IncompleteRecord, match=field):
        predict(trained_model, trip)


def test_none_field(trained_model, sample_trip):
    with pytest.raises(IncompleteRecord):
        predict(trained_model, {**sample_trip, "trip_time_seconds": None})


def test_wrong_field_type(trained_model, sample_trip):
    with pytest.raises(SchemaMismatch):
        predict(trained_model, {**sample_trip, "trip_distance": "far"})


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_field(trained_model, sample_trip, value):
    with pytest.raises(SchemaMismatch):
        predict(trained_model, {**sample_trip, "trip_distance": value})


class TestPredictionEngine:
    def test_predict(self, trained_model, sample_trip):
        engine = PredictionEngine(trained_model)
        assert engine.predict(sample_trip) == predict(trained_model, sample_trip)

    def test_predict_many_frame(self, trained_model, trips_df):
        engine = PredictionEngine(trained_model)
        np.testing.assert_allclose(engine.predict_many(trips_df), trained_model.predict(trips_df))

    def test_predict_many_frame_without_label(self, trained_model, trips_df):
        engine = PredictionEngine(trained_model)
        unlabeled = trips_df.drop(columns=["fare_amount"])
        np.testing.assert_allclose(engine.predict_many(unlabeled), trained_model.predict(trips_df))

    def test_predict_many_records(self, trained_model, sample_trip):
        engine = PredictionEngine(trained_model)
        scores = engine.predict_many([sample_trip, {**sample_trip, "trip_distance": 8.0}])
        assert scores.shape == (2,)
        assert scores[1] > scores[0]

    def test_predict_many_frame_missing_column(self, trained_model, trips_df):
        engine = PredictionEngine(trained_model)
        with pytest.raises(IncompleteRecord):
            engine.predict_many(trips_df.drop(columns=["payment_type"]))

    def test_predict_many_frame_non_finite(self, trained_model, trips_df):
        engine = PredictionEngine(trained_model)
        trips = trips_df.copy()
        trips.loc[2, "trip_distance"] = np.nan
        with pytest.raises(SchemaMismatch):
            engine.predict_many(trips)
