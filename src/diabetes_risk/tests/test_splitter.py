import pandas as pd
import pytest

from diabetes_risk.cleaner import DataCleaner
from diabetes_risk.encoder import CategoryEncoder
from diabetes_risk.errors import SplitError
from diabetes_risk.splitter import StratifiedSplitter


@pytest.fixture
def dataset(raw_frame):
    return CategoryEncoder().transform(DataCleaner().transform(raw_frame))


def test_split_is_deterministic_for_a_seed(dataset):
    train1, test1 = StratifiedSplitter(random_state=11).split(dataset)
    train2, test2 = StratifiedSplitter(random_state=11).split(dataset)

    pd.testing.assert_frame_equal(train1, train2)
    pd.testing.assert_frame_equal(test1, test2)


def test_split_changes_with_seed(dataset):
    train1, _ = StratifiedSplitter(random_state=1).split(dataset)
    train2, _ = StratifiedSplitter(random_state=2).split(dataset)
    assert list(train1.index) != list(train2.index)


def test_split_is_a_disjoint_partition_with_ratio(dataset):
    train, test = StratifiedSplitter(train_ratio=0.8).split(dataset)

    assert set(train.index).isdisjoint(test.index)
    assert len(train) + len(test) == len(dataset)
    assert abs(len(train) - 0.8 * len(dataset)) <= 1


def test_split_preserves_class_proportions(dataset):
    train, test = StratifiedSplitter().split(dataset)
    overall = dataset["diabetes"].mean()

    assert train["diabetes"].mean() == pytest.approx(overall, abs=0.01)
    assert test["diabetes"].mean() == pytest.approx(overall, abs=0.02)


def test_split_returns_independent_copies(dataset):
    train, test = StratifiedSplitter().split(dataset)
    train.loc[:, "age"] = -1.0
    assert (dataset["age"] != -1.0).all()
    assert (test["age"] != -1.0).all()


@pytest.mark.parametrize("ratio", [0.0, 1.0, 1.5])
def test_split_rejects_bad_ratio(ratio):
    with pytest.raises(ValueError):
        StratifiedSplitter(train_ratio=ratio)


def test_split_with_single_minority_row_raises_split_error():
    df = pd.DataFrame({"x": range(10), "diabetes": [0] * 9 + [1]})
    with pytest.raises(SplitError) as exc_info:
        StratifiedSplitter().split(df)

    err = exc_info.value
    assert err.column == "diabetes"
    assert str(err).startswith("[splitter]")


def test_split_with_one_class_raises_split_error():
    df = pd.DataFrame({"x": range(10), "diabetes": [0] * 10})
    with pytest.raises(SplitError):
        StratifiedSplitter().split(df)


def test_split_too_small_test_share_raises_split_error():
    # 20% of 6 rows cannot hold one row of each class
    df = pd.DataFrame({"x": range(6), "diabetes": [0, 0, 0, 0, 1, 1]})
    with pytest.raises(SplitError):
        StratifiedSplitter(train_ratio=0.9).split(df)
