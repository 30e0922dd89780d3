"""Tests for fixup policies and the task builder."""

import warnings

import numpy as np
import pandas as pd
import pytest

from task_tlbx.data.fixup import FixupPolicy, drop_empty_levels, fixup_data
from task_tlbx.errors import (
    BlockingError,
    ConflictError,
    EmptyLevelError,
    InfiniteValueError,
    SchemaError,
    SpatialConfigError,
    TaskDataWarning,
    WeightsError,
)
from task_tlbx.task import Task, TaskType, make_cluster_task, make_task


def _task_warnings(record: list[warnings.WarningMessage]) -> list[warnings.WarningMessage]:
    return [w for w in record if issubclass(w.category, TaskDataWarning)]


class TestFixup:
    """Test the empty-level cleanup policies."""

    def test_parse_policy(self) -> None:
        """Test string values map onto the enum."""
        assert FixupPolicy.parse("warn") is FixupPolicy.WARN
        assert FixupPolicy.parse("no") is FixupPolicy.SKIP
        with pytest.raises(ValueError, match="Invalid fixup_data"):
            FixupPolicy.parse("loud")

    def test_drop_empty_levels_reports_columns_in_order(self) -> None:
        """Test all changed columns are returned in column order."""
        df = pd.DataFrame(
            {
                "b": pd.Categorical(["x"], categories=["x", "y"]),
                "a": [1.0],
                "c": pd.Categorical(["u"], categories=["u", "v"]),
            },
        )
        cleaned, dropped = drop_empty_levels(df)
        assert dropped == ["b", "c"]
        assert cleaned["b"].cat.categories.to_list() == ["x"]
        assert df["b"].cat.categories.to_list() == ["x", "y"]

    def test_skip_keeps_levels(self, empty_level_df: pd.DataFrame) -> None:
        """Test the skip policy never alters category universes."""
        result = fixup_data(empty_level_df, "no")
        assert result["c"].cat.categories.to_list() == ["lo", "mid", "hi"]

    def test_quiet_drops_silently(self, empty_level_df: pd.DataFrame) -> None:
        """Test quiet cleanup emits no warning."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", TaskDataWarning)
            result = fixup_data(empty_level_df, "quiet")
        assert result["c"].cat.categories.to_list() == ["lo", "mid"]

    def test_warn_emits_single_aggregated_warning(self) -> None:
        """Test one warning lists every affected column."""
        df = pd.DataFrame(
            {
                "c1": pd.Categorical(["a"], categories=["a", "b"]),
                "c2": pd.Categorical(["a"], categories=["a", "z"]),
            },
        )
        with pytest.warns(TaskDataWarning) as record:
            fixup_data(df, "warn")
        task_warnings = _task_warnings(record.list)
        assert len(task_warnings) == 1
        assert "c1, c2" in str(task_warnings[0].message)


class TestMakeTask:
    """Test building tasks through make_task."""

    def test_basic_task(self, mixed_df: pd.DataFrame) -> None:
        """Test a valid frame yields an undescribed task."""
        task = make_task("classif", mixed_df, target=["label"])
        assert isinstance(task, Task)
        assert task.type is TaskType.CLASSIF
        assert task.size == 6
        assert task.feature_names == ["num", "count", "color", "size"]
        assert not task.has_weights
        assert not task.has_blocking
        assert not task.is_described
        with pytest.raises(ValueError, match="not described"):
            _ = task.task_desc

    def test_warn_and_clean_scenario(self, empty_level_df: pd.DataFrame) -> None:
        """Test warn-and-clean drops 'hi' and warns once naming 'c'."""
        with pytest.warns(TaskDataWarning, match="c") as record:
            task = make_task("cluster", empty_level_df, fixup_data="warn")
        assert len(_task_warnings(record.list)) == 1
        assert task.data["c"].cat.categories.to_list() == ["lo", "mid"]
        assert task.data["c"].to_list() == ["lo", "mid", "lo"]

    def test_skip_with_check_raises_empty_level(self, empty_level_df: pd.DataFrame) -> None:
        """Test empty levels surface in validation when fixup is skipped."""
        with pytest.raises(EmptyLevelError):
            make_task("cluster", empty_level_df, fixup_data="no")

    def test_skip_without_check_keeps_levels(self, empty_level_df: pd.DataFrame) -> None:
        """Test skip keeps category universes untouched."""
        task = make_task("cluster", empty_level_df, fixup_data="no", check_data=False)
        assert task.data["c"].cat.categories.to_list() == ["lo", "mid", "hi"]

    def test_infinite_feature_scenario(self) -> None:
        """Test infinite values in a feature abort construction."""
        df = pd.DataFrame({"a": [1.0, 2.0, np.inf]})
        with pytest.raises(InfiniteValueError) as exc_info:
            make_task("regr", df, check_data=True)
        assert exc_info.value.column == "a"

    def test_target_excluded_from_feature_check(self) -> None:
        """Test target columns are not validated as features."""
        df = pd.DataFrame({"a": [1.0, 2.0], "flag": [True, False]})
        task = make_task("multilabel", df, target=["flag"])
        assert task.feature_names == ["a"]

    @pytest.mark.parametrize("data", [None, [[1, 2]], {"a": [1]}])
    def test_non_frame_rejected(self, data: object) -> None:
        """Test only DataFrames are accepted."""
        with pytest.raises(SchemaError, match="DataFrame"):
            make_task("cluster", data)

    def test_duplicate_columns_rejected(self) -> None:
        """Test duplicated column names are rejected even without checks."""
        df = pd.DataFrame([[1.0, 2.0]], columns=["a", "a"])
        with pytest.raises(SchemaError, match="unique"):
            make_task("cluster", df, check_data=False)

    @pytest.mark.parametrize("bad_name", ["", "  ", 0])
    def test_blank_or_non_string_columns_rejected(self, bad_name: object) -> None:
        """Test blank and non-string column names are rejected."""
        df = pd.DataFrame([[1.0, 2.0]], columns=["a", bad_name])
        with pytest.raises(SchemaError, match="non-empty strings"):
            make_task("cluster", df)

    def test_unknown_target(self, mixed_df: pd.DataFrame) -> None:
        """Test a target that is not a column raises SchemaError."""
        with pytest.raises(SchemaError, match="nope"):
            make_task("regr", mixed_df, target=["nope"])

    def test_subclass_converted_with_warning(self) -> None:
        """Test DataFrame subclasses are converted and never retained."""

        class MyFrame(pd.DataFrame):
            @property
            def _constructor(self):
                return MyFrame

        df = MyFrame({"a": [1.0, 2.0]})
        with pytest.warns(TaskDataWarning, match="MyFrame"):
            task = make_task("cluster", df)
        assert type(task.data) is pd.DataFrame

    def test_data_is_copied_in_and_out(self, mixed_df: pd.DataFrame) -> None:
        """Test neither the input nor a returned frame aliases task data."""
        task = make_task("cluster", mixed_df)
        mixed_df.loc[0, "num"] = -100.0
        assert task.data.loc[0, "num"] == 1.0
        out = task.data
        out.loc[0, "num"] = -200.0
        assert task.data.loc[0, "num"] == 1.0

    def test_task_is_immutable(self, mixed_df: pd.DataFrame) -> None:
        """Test attributes cannot be reassigned after construction."""
        task = make_task("cluster", mixed_df)
        with pytest.raises(AttributeError):
            task._data = mixed_df  # type: ignore[misc]
        with pytest.raises(AttributeError, match="immutable"):
            del task._data
        assert task.size == 6

    def test_fixup_warning_points_at_caller(self, empty_level_df: pd.DataFrame) -> None:
        """Test the cleanup warning is attributed to the calling code."""
        with pytest.warns(TaskDataWarning) as record:
            make_cluster_task(empty_level_df, fixup_data="warn")
        with pytest.warns(TaskDataWarning) as direct:
            make_task("cluster", empty_level_df, fixup_data="warn")
        for rec in (record, direct):
            assert [w.filename for w in _task_warnings(rec.list)] == [__file__]


class TestWeights:
    """Test weight validation."""

    def test_valid_weights(self, mixed_df: pd.DataFrame) -> None:
        """Test weights are stored as a read-only float array."""
        task = make_task("cluster", mixed_df, weights=[1, 2, 0, 1, 1, 1])
        assert task.has_weights
        assert task.weights.dtype == np.float64
        with pytest.raises(ValueError):
            task.weights[0] = 5.0

    def test_wrong_length_checked(self, mixed_df: pd.DataFrame) -> None:
        """Test length mismatch fails with checks enabled."""
        with pytest.raises(WeightsError, match="length"):
            make_task("cluster", mixed_df, weights=[1.0, 1.0])

    def test_wrong_length_unchecked(self, mixed_df: pd.DataFrame) -> None:
        """Test length mismatch passes when checks are disabled."""
        task = make_task("cluster", mixed_df, weights=[1.0, 1.0], check_data=False)
        assert len(task.weights) == 2

    def test_negative_weight_scenario(self) -> None:
        """Test a negative weight fails for a regression task."""
        df = pd.DataFrame({"a": [1.0, 2.0, 3.0], "y": [0.1, 0.2, 0.3]})
        with pytest.raises(WeightsError, match="non-negative"):
            make_task("regr", df, weights=[0.5, 0.5, -0.1], check_data=True, target=["y"])

    def test_missing_weight(self, mixed_df: pd.DataFrame) -> None:
        """Test missing weights are rejected."""
        with pytest.raises(WeightsError, match="missing"):
            make_task("cluster", mixed_df, weights=[1, 1, 1, np.nan, 1, 1])

    def test_two_dimensional_weights(self, mixed_df: pd.DataFrame) -> None:
        """Test column-vector weights are rejected as WeightsError."""
        with pytest.raises(WeightsError, match="one-dimensional"):
            make_task("cluster", mixed_df, weights=np.ones((6, 1)))

    def test_non_numeric_weights(self, mixed_df: pd.DataFrame) -> None:
        """Test boolean and string weights are rejected."""
        with pytest.raises(WeightsError, match="numeric"):
            make_task("cluster", mixed_df, weights=[True] * 6)
        with pytest.raises(WeightsError, match="numeric"):
            make_task("cluster", mixed_df, weights=["1"] * 6)

    @pytest.mark.parametrize("check_data", [True, False])
    def test_weights_conflict_with_costsens(self, mixed_df: pd.DataFrame, check_data: bool) -> None:
        """Test weights for cost-sensitive tasks always conflict."""
        with pytest.raises(ConflictError):
            make_task("costsens", mixed_df, weights=[1.0] * 6, check_data=check_data)


class TestBlocking:
    """Test blocking validation."""

    def test_valid_blocking(self, mixed_df: pd.DataFrame) -> None:
        """Test a categorical blocking is stored."""
        blocking = pd.Categorical(["g1", "g1", "g2", "g2", "g3", "g3"])
        task = make_task("cluster", mixed_df, blocking=blocking)
        assert task.has_blocking
        assert list(task.blocking) == list(blocking)

    def test_blocking_series(self, mixed_df: pd.DataFrame) -> None:
        """Test a category Series is accepted."""
        blocking = pd.Series(["a", "b", "a", "b", "a", "b"], dtype="category")
        assert make_task("cluster", mixed_df, blocking=blocking).has_blocking

    def test_zero_length_blocking_is_absent(self, mixed_df: pd.DataFrame) -> None:
        """Test an empty blocking is treated as no blocking."""
        task = make_task("cluster", mixed_df, blocking=pd.Categorical([]))
        assert not task.has_blocking
        assert task.blocking is None

    def test_wrong_length(self, mixed_df: pd.DataFrame) -> None:
        """Test a non-empty blocking of wrong length fails."""
        with pytest.raises(BlockingError, match="same length"):
            make_task("cluster", mixed_df, blocking=pd.Categorical(["a", "b"]))

    def test_missing_values(self, mixed_df: pd.DataFrame) -> None:
        """Test missing blocking entries fail."""
        blocking = pd.Categorical(["a", "b", None, "a", "b", "a"])
        with pytest.raises(BlockingError, match="missing"):
            make_task("cluster", mixed_df, blocking=blocking)

    def test_two_dimensional_blocking(self, mixed_df: pd.DataFrame) -> None:
        """Test nested blocking input is rejected as BlockingError."""
        with pytest.raises(BlockingError, match="one-dimensional"):
            make_task("cluster", mixed_df, blocking=[["a"]] * 6)

    def test_non_categorical(self, mixed_df: pd.DataFrame) -> None:
        """Test plain lists are not accepted as blocking."""
        with pytest.raises(BlockingError, match="categorical"):
            make_task("cluster", mixed_df, blocking=[1, 1, 2, 2, 3, 3])


class TestSpatial:
    """Test reservation of coordinate columns."""

    def test_spatial_excludes_coordinates(self, spatial_df: pd.DataFrame) -> None:
        """Test x/y are kept in data but excluded from features."""
        task = make_task("cluster", spatial_df, spatial=True)
        assert task.feature_names == ["elev", "soil"]
        assert {"x", "y"} <= set(task.data.columns)

    def test_missing_y(self, spatial_df: pd.DataFrame) -> None:
        """Test missing 'y' raises SpatialConfigError naming it."""
        with pytest.raises(SpatialConfigError, match="'y'") as exc_info:
            make_task("cluster", spatial_df.drop(columns="y"), spatial=True)
        assert "'x'" not in str(exc_info.value).split("rename")[0]

    def test_no_fuzzy_matching(self, spatial_df: pd.DataFrame) -> None:
        """Test differently named coordinates are ordinary features."""
        df = spatial_df.rename(columns={"x": "X", "y": "lat"})
        with pytest.raises(SpatialConfigError):
            make_task("cluster", df, spatial=True)
        task = make_task("cluster", df, spatial=False)
        assert "X" in task.feature_names
        assert "lat" in task.feature_names

    def test_coordinates_checked_before_features(self) -> None:
        """Test a missing coordinate is reported before unsupported features."""
        df = pd.DataFrame({"x": [1.0], "s": ["a"]})
        with pytest.raises(SpatialConfigError, match="'y'"):
            make_task("cluster", df, spatial=True)

    def test_spatial_checked_without_check_data(self, spatial_df: pd.DataFrame) -> None:
        """Test the coordinate check runs even with checks disabled."""
        with pytest.raises(SpatialConfigError):
            make_task("cluster", spatial_df.drop(columns="x"), check_data=False, spatial=True)
