import sys
from pathlib import Path

import pandas as pd
import pytest

# 평면 구조 모듈(constants, processor ...)을 바로 import 할 수 있도록
sys.path.insert(0, str(Path(__file__).parents[1]))

import constants as const  # noqa: E402

MAIN_HEADERS = [
    const.SALE_DATE, const.ORDER_DATETIME, const.ORDER_ID, const.BRAND, const.PROMO_CODE,
    const.PRODUCT_ID, const.PRODUCT_NAME, const.QUANTITY, const.SHIP_COUNTRY,
    const.AMOUNT, const.CATEGORY,
]

# 원본 내보내기 파일 두 번째 행에 들어 있는 서브 헤더
SUBHEADER_ROW = {col: f"({col})" for col in MAIN_HEADERS}


@pytest.fixture
def main_csv_text():
    return '''매출일자,주문일시,주문번호,브랜드,프로모코드,상품번호,상품명,수량,배송국가,거래액(원화,카테고리
2024-01-01,2024-01-01 10:00,"=""1001""",BrandA,,P1,Shirt,1,US,100,
(매출일자),(주문일시),(주문번호),(브랜드),(프로모코드),(상품번호),(상품명),(수량),(배송국가),(거래액),(카테고리)
2024-01-02,2024-01-02 11:30,"=""1002""",BrandA,PROMO10,P1,Shirt,2,US,50,
2024-01-03,2024-01-03 09:15,"=""1003""",BrandB,,P2,Pants,1,KR,200,
'''


@pytest.fixture
def mapping_csv_text():
    return '''상품번호,상품명,브랜드,카테고리
P1,Shirt,BrandA,Tops
P2,Pants,BrandB,Bottoms
'''


@pytest.fixture
def make_main_df():
    """데이터 행 목록으로 업로드 직후 형태의 DataFrame을 만든다 (1번 위치에 서브 헤더 삽입)"""

    def build(rows):
        data = []
        for row in rows:
            full = {col: '' for col in MAIN_HEADERS}
            full.update(row)
            data.append(full)
        if data:
            data.insert(1, dict(SUBHEADER_ROW))
        return pd.DataFrame(data, columns=MAIN_HEADERS)

    return build


@pytest.fixture
def example_rows():
    return [
        {const.PRODUCT_ID: 'P1', const.PRODUCT_NAME: 'Shirt', const.BRAND: 'BrandA',
         const.SHIP_COUNTRY: 'US', const.AMOUNT: '100'},
        {const.PRODUCT_ID: 'P1', const.PRODUCT_NAME: 'Shirt', const.BRAND: 'BrandA',
         const.SHIP_COUNTRY: 'US', const.AMOUNT: '50'},
        {const.PRODUCT_ID: 'P2', const.PRODUCT_NAME: 'Pants', const.BRAND: 'BrandB',
         const.SHIP_COUNTRY: 'KR', const.AMOUNT: '200'},
    ]


@pytest.fixture
def example_records(make_main_df, example_rows):
    from processor import ingest_main_table
    return ingest_main_table(make_main_df(example_rows))
