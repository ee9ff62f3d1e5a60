import io

import pandas as pd

import constants as const
from logger import logger


class IngestionError(Exception):
    """업로드 파일을 어떤 인코딩으로도 읽지 못했을 때"""


def read_csv_upload(data: bytes, encodings=None) -> pd.DataFrame:
    """업로드된 CSV 바이트를 읽는다. UTF-8이 실패하면 다음 인코딩으로 같은 파싱을 재시도"""
    encodings = encodings or const.ENCODINGS
    failures = []
    for encoding in encodings:
        try:
            # 모든 값을 문자열로 읽고 빈 칸은 NaN이 아닌 빈 문자열로 유지
            df = pd.read_csv(
                io.BytesIO(data),
                encoding=encoding,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except (UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.info("CSV read with %s failed: %s", encoding, e)
            failures.append(f"{encoding}: {e}")
            continue

        df.columns = [str(c).strip() for c in df.columns]
        if failures:
            logger.info("CSV read with fallback encoding %s", encoding)
        return df

    raise IngestionError("CSV 파일을 읽을 수 없습니다 (" + "; ".join(failures) + ")")


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    """헤더 포함 CSV로 직렬화 (엑셀에서 한글이 깨지지 않도록 BOM 포함)"""
    return df.to_csv(index=False).encode(const.EXPORT_ENCODING)


def to_excel_bytes(df: pd.DataFrame, sheet_name=const.MERGED_SHEET_NAME) -> bytes:
    # Excel 다운로드용 버퍼 생성
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()
