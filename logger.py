import logging

import constants as const

LOG_FORMAT = '%(asctime)s %(levelname)s %(message)s'


def setup_logger():
    logger = logging.getLogger(const.LOGGER_NAME)
    logger.setLevel(const.LOG_LEVEL)

    # Streamlit 재실행 때마다 핸들러가 쌓이지 않도록 한 번만 붙인다
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger

logger = setup_logger()

def log_malformed_row(row_num: int, reason: str, raw_data: str = ""):
    """변환에 실패한 데이터 행을 경고로 남긴다 (행 번호는 헤더 다음 첫 데이터 행이 1, 빈 줄은 세지 않음)"""
    msg = f"Row {row_num}: {reason}"
    if raw_data:
        msg += f" (원본 값: {raw_data})"
    logger.warning(msg)
