import pandas as pd

import constants as const

BUCKET_COLUMNS = ['total_amount', 'count']


def country_index(records):
    """배송국가 목록(처음 나온 순서)과 기본 선택 국가"""
    if records is None or records.empty:
        return [], ''
    countries = records[const.SHIP_COUNTRY].drop_duplicates().tolist()
    return countries, countries[0]


def filter_by_country(records, country):
    if country == const.ALL_COUNTRIES:
        return records
    return records[records[const.SHIP_COUNTRY] == country]


def aggregate_by_product(records, country):
    """
    상품번호별 거래액 합계와 주문 건수.
    Output: index=상품번호 (처음 나온 순서), columns: total_amount, count
    변환에 실패한(NaN) 거래액은 합계에 더해지지 않지만 건수에는 포함된다.
    """
    subset = filter_by_country(records, country)
    if subset.empty:
        return pd.DataFrame(columns=BUCKET_COLUMNS).rename_axis(const.PRODUCT_ID)

    return subset.groupby(const.PRODUCT_ID, sort=False).agg(
        total_amount=(const.AMOUNT, 'sum'),
        count=(const.AMOUNT, 'size'),
    )


def top_n_products(records, country, top_n, descriptor_source=None):
    """선택 국가의 거래액 상위 N개 상품. 동점이면 먼저 나온 상품이 앞선다"""
    descriptor_source = descriptor_source or const.DESCRIPTOR_SOURCE
    if descriptor_source not in ('full', 'filtered'):
        raise ValueError(f"Unknown descriptor source: {descriptor_source}")

    top_n = int(top_n)
    if records is None or records.empty or top_n <= 0:
        return pd.DataFrame(columns=const.TOP_N_COLUMNS)

    buckets = aggregate_by_product(records, country)
    ranked = buckets.sort_values('total_amount', ascending=False, kind='mergesort').head(top_n)

    # 상품명/브랜드/카테고리는 해당 상품번호의 첫 레코드에서 가져온다
    source = records if descriptor_source == 'full' else filter_by_country(records, country)
    descriptors = (
        source.drop_duplicates(subset=const.PRODUCT_ID, keep='first')
        .set_index(const.PRODUCT_ID)
        .reindex(ranked.index)
    )

    return pd.DataFrame({
        const.PRODUCT_ID: ranked.index.to_numpy(),
        const.PRODUCT_NAME: descriptors[const.PRODUCT_NAME].to_numpy(),
        const.BRAND: descriptors[const.BRAND].to_numpy(),
        const.CATEGORY: descriptors[const.CATEGORY].to_numpy(),
        const.AMOUNT: ranked['total_amount'].to_numpy(),
        const.QUANTITY: ranked['count'].to_numpy(),
    }, columns=const.TOP_N_COLUMNS)
