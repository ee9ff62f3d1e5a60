from typing import NamedTuple

import numpy as np
import pandas as pd

import constants as const
from logger import logger, log_malformed_row


class FieldCoercionError(ValueError):
    """strict 정책에서 숫자로 바꿀 수 없는 값이 나왔을 때"""

    def __init__(self, column, row_numbers):
        self.column = column
        self.row_numbers = [int(n) for n in row_numbers]
        super().__init__(f"'{column}' 값을 숫자로 변환할 수 없는 데이터 행: {self.row_numbers}")


class AmountParse(NamedTuple):
    values: pd.Series
    ok: pd.Series


def format_code_column(series):
    """상품번호 등 코드 성격의 값을 깨끗한 문자열로 변환 (12345.0 -> 12345)"""
    s = series.fillna('').astype(str).replace(const.NULL_LIKE_VALUES, '').str.strip()
    return s.apply(lambda x: x[:-2] if x.endswith('.0') and x[:-2].isdigit() else x)


def sanitize_order_id(series):
    """엑셀 수식 형태(="12345")의 주문번호에서 = 와 " 를 모두 제거"""
    return series.fillna('').astype(str).str.replace(r'[="]', '', regex=True)


def drop_subheader_row(df, index=const.SUBHEADER_ROW_INDEX):
    """원본 내보내기 형식의 서브 헤더 행을 위치 기준으로 삭제 (데이터 내용은 보지 않음)"""
    if index is None or len(df) <= index:
        return df
    logger.info("Dropping sub-header row at position %d", index)
    return df.drop(df.index[index])


def pick_amount_source(df):
    """첫 번째 거래액 헤더 값을 쓰고, 비어 있으면 다른 표기의 헤더 값을 사용"""
    raw = pd.Series('', index=df.index, dtype=object)
    for col in reversed(const.AMOUNT_SOURCE_COLS):
        if col in df.columns:
            values = df[col]
            filled = values.notna() & (values.astype(str).str.strip() != '')
            raw = values.where(filled, raw)
    return raw


def parse_amount(raw):
    """거래액 문자열을 실수로 변환. 값과 행별 성공 여부를 함께 돌려준다"""
    text = raw.astype(str).str.strip().str.replace(',', '', regex=False)
    values = pd.to_numeric(text, errors='coerce').astype(float)
    ok = values.notna() & np.isfinite(values)
    return AmountParse(values.where(ok), ok)


def apply_coercion_policy(parsed, raw, row_numbers, policy=None, column=const.AMOUNT):
    policy = policy or const.COERCION_POLICY
    if policy not in ('lenient', 'strict'):
        raise ValueError(f"Unknown coercion policy: {policy}")

    failed = ~parsed.ok
    if not failed.any():
        return parsed.values

    if policy == 'strict':
        raise FieldCoercionError(column, row_numbers[failed])

    # lenient: NaN으로 남기고 계속 진행
    for row_num, value in zip(row_numbers[failed], raw[failed]):
        log_malformed_row(int(row_num), f"'{column}' is not a number", raw_data=str(value))
    return parsed.values


def ingest_main_table(raw_df, category_map=None, policy=None):
    """판매 CSV 원본 행들을 정제된 판매 레코드 테이블로 변환"""
    category_map = category_map or {}

    # 데이터 행 번호: 헤더 다음 첫 행이 1 (빈 줄은 파싱 단계에서 이미 빠짐, 서브 헤더 행도 번호는 차지)
    row_numbers = pd.Series(np.arange(len(raw_df)) + 1, index=raw_df.index)
    df = drop_subheader_row(raw_df)
    row_numbers = row_numbers.loc[df.index]

    def column(name):
        if name in df.columns:
            return df[name]
        return pd.Series('', index=df.index, dtype=object)

    product_ids = format_code_column(column(const.PRODUCT_ID))
    raw_amount = pick_amount_source(df)
    amounts = apply_coercion_policy(parse_amount(raw_amount), raw_amount, row_numbers, policy)

    records = pd.DataFrame({col: column(col) for col in const.PASSTHROUGH_COLS})
    records[const.ORDER_ID] = sanitize_order_id(column(const.ORDER_ID))
    records[const.PRODUCT_ID] = product_ids
    records[const.AMOUNT] = amounts
    records[const.CATEGORY] = product_ids.map(category_map).fillna('')
    records = records[const.RECORD_COLUMNS].reset_index(drop=True)

    logger.info("Ingested %d sales records (%d categorized)",
                len(records), int((records[const.CATEGORY] != '').sum()))
    return records
