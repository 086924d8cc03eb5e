"""Column names and fixed encoding tables for the diabetes dataset."""

from types import MappingProxyType

GENDER = "gender"
AGE = "age"
HYPERTENSION = "hypertension"
HEART_DISEASE = "heart_disease"
SMOKING_HISTORY = "smoking_history"
BMI = "bmi"
HBA1C = "HbA1c_level"
GLUCOSE = "blood_glucose_level"
DIABETES = "diabetes"

GENDER_CODE = "gender_code"
SMOKING_CODE = "smoking_code"

RAW_COLUMNS = (
    GENDER,
    AGE,
    HYPERTENSION,
    HEART_DISEASE,
    SMOKING_HISTORY,
    BMI,
    HBA1C,
    GLUCOSE,
    DIABETES,
)

TEXT_COLUMNS = (GENDER, SMOKING_HISTORY)
CONTINUOUS_COLUMNS = (AGE, BMI, HBA1C, GLUCOSE)
BINARY_COLUMNS = (HYPERTENSION, HEART_DISEASE, DIABETES)
NUMERIC_COLUMNS = CONTINUOUS_COLUMNS + BINARY_COLUMNS

ENCODED_COLUMNS = (
    GENDER_CODE,
    AGE,
    HYPERTENSION,
    HEART_DISEASE,
    SMOKING_CODE,
    BMI,
    HBA1C,
    GLUCOSE,
    DIABETES,
)

# nominal attributes used for chi-square tests against the target
CATEGORICAL_COLUMNS = (GENDER_CODE, HYPERTENSION, HEART_DISEASE, SMOKING_CODE)

SMOKING_SENTINEL = "No Info"

GENDER_CODES = MappingProxyType({"Male": 0, "Female": 1, "Other": 2})

# five raw levels (after the sentinel is dropped) fold into three
SMOKING_CODES = MappingProxyType(
    {
        "never": 0,
        "former": 1,
        "not current": 1,
        "ever": 1,
        "current": 2,
    }
)

# raw column -> (code column, lookup table)
DEFAULT_ENCODING_TABLES = MappingProxyType(
    {
        GENDER: (GENDER_CODE, GENDER_CODES),
        SMOKING_HISTORY: (SMOKING_CODE, SMOKING_CODES),
    }
)
