import numpy as np
import pandas as pd

from diabetes_risk.cleaner import DataCleaner


def _frame():
    return pd.DataFrame(
        {
            "gender": ["Female", "Male", "  ", "Male", "Female", " Female ", "Male"],
            "age": [80.0, 54.0, 28.0, np.nan, 36.0, 20.0, 76.0],
            "hypertension": [0, 0, 0, 0, 0, 0, 1],
            "heart_disease": [1, 0, 0, 0, 0, 0, 1],
            "smoking_history": ["never", "No Info", "never", "current", "no info", "former", None],
            "bmi": [25.19, 27.32, 27.32, 23.45, 23.45, 21.0, 20.14],
            "HbA1c_level": [6.6, 6.6, 5.7, 5.0, 5.0, 4.8, 4.8],
            "blood_glucose_level": [140, 80, 158, 155, 155, 90, 155],
            "diabetes": [0, 0, 0, 0, 0, 0, 0],
        }
    )


def test_cleaner_drops_missing_blank_and_sentinel_rows():
    out = DataCleaner().transform(_frame())

    # kept: row 0, row 4 ("no info" is not the sentinel), row 5 (trimmed)
    assert list(out.index) == [0, 4, 5]
    assert out.notna().all().all()
    assert not (out["smoking_history"] == "No Info").any()


def test_cleaner_trims_text_fields():
    out = DataCleaner().transform(_frame())
    assert out.loc[5, "gender"] == "Female"


def test_cleaner_is_idempotent():
    cleaner = DataCleaner()
    once = cleaner.transform(_frame())
    twice = cleaner.transform(once)
    pd.testing.assert_frame_equal(once, twice)


def test_cleaner_filters_commute():
    cleaner = DataCleaner()
    a = cleaner.drop_sentinel(cleaner.drop_incomplete(_frame()))
    b = cleaner.drop_incomplete(cleaner.drop_sentinel(_frame()))
    assert list(a.index) == list(b.index)


def test_cleaner_does_not_mutate_input():
    df = _frame()
    before = df.copy(deep=True)
    DataCleaner().transform(df)
    pd.testing.assert_frame_equal(df, before)


def test_cleaner_custom_sentinel():
    out = DataCleaner(sentinel="never").transform(_frame())
    assert "never" not in set(out["smoking_history"])
    assert "No Info" in set(out["smoking_history"])
