### 자주 바뀌거나 관리해야 할 컬럼명, 매핑 규칙, 파일명을 모아둔 파일 ###

# 1. 메인(판매) 테이블 컬럼명
SALE_DATE = '매출일자'
ORDER_DATETIME = '주문일시'
ORDER_ID = '주문번호'
BRAND = '브랜드'
PROMO_CODE = '프로모코드'
PRODUCT_ID = '상품번호'
PRODUCT_NAME = '상품명'
QUANTITY = '수량'
SHIP_COUNTRY = '배송국가'
AMOUNT = '거래액(원화'
CATEGORY = '카테고리'

# 정제 후 레코드 컬럼 순서 (내보내기 헤더도 이 순서)
RECORD_COLUMNS = [
    SALE_DATE, ORDER_DATETIME, ORDER_ID, BRAND, PROMO_CODE, PRODUCT_ID,
    PRODUCT_NAME, QUANTITY, SHIP_COUNTRY, AMOUNT, CATEGORY,
]

# 가공 없이 그대로 옮기는 컬럼
PASSTHROUGH_COLS = [SALE_DATE, ORDER_DATETIME, BRAND, PROMO_CODE, PRODUCT_NAME, QUANTITY, SHIP_COUNTRY]

# 2. 거래액 헤더는 파일마다 두 가지 표기 중 하나 (앞쪽 우선)
AMOUNT_SOURCE_COLS = ['거래액(원화', '거래액(원화)']

# 3. 코드성 컬럼 중 비어 있는 값으로 취급할 문자열
NULL_LIKE_VALUES = ['nan', 'None', 'nan.0']

# 4. 원본 내보내기 파일의 두 번째 행(서브 헤더)은 무조건 삭제 (None이면 삭제 안 함)
SUBHEADER_ROW_INDEX = 1

# 5. 업로드 파일 인코딩 시도 순서 (UTF-8 실패 시 한글 윈도우 인코딩)
ENCODINGS = ['utf-8-sig', 'cp949']

# 6. 매핑 테이블: 헤더가 없으면 위치로 찾는다 (상품번호=첫 번째 열, 카테고리=네 번째 열)
MAPPING_ID_POSITION = 0
MAPPING_CATEGORY_POSITION = 3

# 7. Top-N 집계
ALL_COUNTRIES = 'all'
DEFAULT_TOP_N = 5
TOP_N_COLUMNS = [PRODUCT_ID, PRODUCT_NAME, BRAND, CATEGORY, AMOUNT, QUANTITY]

# 상품명/브랜드/카테고리를 찾을 범위: 'full'(전체 데이터) 또는 'filtered'(선택 국가)
DESCRIPTOR_SOURCE = 'full'

# 8. 숫자 변환 실패 처리: 'lenient'(NaN으로 두고 계속) 또는 'strict'(예외)
COERCION_POLICY = 'lenient'

# 9. 내보내기 파일명 및 인코딩
MERGED_CSV_FILENAME = "exported_data.csv"
MERGED_EXCEL_FILENAME = "merged_data.xlsx"
MERGED_SHEET_NAME = "MergedData"
TOP_N_FILENAME_FMT = "{country}_topN_data.csv"
EXPORT_ENCODING = "utf-8-sig"

# 10. 로그
LOGGER_NAME = "sales_merger"
LOG_LEVEL = "INFO"
