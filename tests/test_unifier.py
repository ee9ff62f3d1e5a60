import pandas as pd
import pytest

import constants as const
from csv_io import IngestionError, read_csv_upload
from unifier import MappingFormatError, backfill_categories, build_category_map


def test_builds_map_from_header_names(mapping_csv_text):
    raw = read_csv_upload(mapping_csv_text.encode("utf-8"))

    assert build_category_map(raw) == {'P1': 'Tops', 'P2': 'Bottoms'}


def test_falls_back_to_first_and_fourth_columns():
    raw = pd.DataFrame({
        'code': ['P1', 'P2'],
        'name': ['Shirt', 'Pants'],
        'brand': ['A', 'B'],
        'group': ['Tops', 'Bottoms'],
    })

    assert build_category_map(raw) == {'P1': 'Tops', 'P2': 'Bottoms'}


def test_missing_category_column_raises():
    raw = pd.DataFrame({const.PRODUCT_ID: ['P1'], 'name': ['Shirt']})

    with pytest.raises(MappingFormatError):
        build_category_map(raw)
    assert issubclass(MappingFormatError, IngestionError)


def test_last_duplicate_wins_and_blanks_are_unmapped():
    raw = pd.DataFrame({
        const.PRODUCT_ID: ['P1', 'P1', 'P2', 'P3', 'P3', ''],
        const.CATEGORY: ['Old', 'New', '', 'Kept', ' ', 'Orphan'],
    })

    assert build_category_map(raw) == {'P1': 'New'}


def test_numeric_product_ids_match_main_table_ids():
    raw = pd.DataFrame({const.PRODUCT_ID: [12345.0], const.CATEGORY: ['Tops']})

    assert build_category_map(raw) == {'12345': 'Tops'}


def test_backfill_is_monotonic(example_records):
    before = example_records.copy()
    before[const.CATEGORY] = ['Old', 'Old', 'Keep']

    after = backfill_categories(before, {'P1': 'Tops', 'P9': 'Unused'})

    assert after[const.CATEGORY].tolist() == ['Tops', 'Tops', 'Keep']
    # 카테고리 외 컬럼은 그대로
    pd.testing.assert_frame_equal(
        after.drop(columns=const.CATEGORY), before.drop(columns=const.CATEGORY)
    )


def test_backfill_does_not_touch_input_frame(example_records):
    backfill_categories(example_records, {'P1': 'Tops'})

    assert example_records[const.CATEGORY].tolist() == ['', '', '']


def test_backfill_without_records_is_noop():
    assert backfill_categories(None, {'P1': 'Tops'}) is None
