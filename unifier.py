import pandas as pd

import constants as const
from csv_io import IngestionError
from logger import logger
from processor import format_code_column


class MappingFormatError(IngestionError):
    """매핑 CSV에서 상품번호/카테고리 컬럼을 찾지 못했을 때"""


def _resolve_column(df, name, position):
    # 헤더 이름 우선, 없으면 위치로
    if name in df.columns:
        return name
    if len(df.columns) > position:
        return df.columns[position]
    raise MappingFormatError(f"매핑 파일에 '{name}' 컬럼이 없습니다 (열 {position + 1}개 이상 필요)")


def build_category_map(raw_df):
    """매핑 CSV로 상품번호 -> 카테고리 사전을 새로 만든다 (기존 매핑과 합치지 않음)"""
    id_col = _resolve_column(raw_df, const.PRODUCT_ID, const.MAPPING_ID_POSITION)
    cat_col = _resolve_column(raw_df, const.CATEGORY, const.MAPPING_CATEGORY_POSITION)

    mapping = pd.DataFrame({
        'product_id': format_code_column(raw_df[id_col]),
        'category': raw_df[cat_col].fillna('').astype(str),
    })
    mapping = mapping[mapping['product_id'] != '']

    # 1. 중복 상품번호는 마지막 값 사용
    mapping = mapping.drop_duplicates(subset='product_id', keep='last')
    # 2. 카테고리가 빈 항목은 매핑이 없는 것으로 취급
    mapping = mapping[mapping['category'].str.strip() != '']

    category_map = dict(zip(mapping['product_id'], mapping['category']))
    logger.info("Built category map with %d products", len(category_map))
    return category_map


def backfill_categories(records, category_map):
    """이미 올라온 판매 레코드의 카테고리를 새 매핑으로 갱신. 매핑에 없는 상품은 기존 값 유지"""
    if records is None:
        return None

    updated = records.copy()
    mapped = updated[const.PRODUCT_ID].map(category_map)
    updated[const.CATEGORY] = mapped.fillna(updated[const.CATEGORY])

    logger.info("Back-filled category for %d of %d records", int(mapped.notna().sum()), len(updated))
    return updated
