from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pandas as pd

import constants as const
from aggregator import country_index, top_n_products
from csv_io import to_csv_bytes, to_excel_bytes
from processor import ingest_main_table
from unifier import backfill_categories, build_category_map


@dataclass
class PipelineState:
    """세션 동안 유지되는 업로드 결과와 사용자 선택값"""

    records: Optional[pd.DataFrame] = None
    category_map: Dict[str, str] = field(default_factory=dict)
    countries: List[str] = field(default_factory=list)
    selected_country: str = ''
    top_n: int = const.DEFAULT_TOP_N
    coercion_policy: str = const.COERCION_POLICY
    descriptor_source: str = const.DESCRIPTOR_SOURCE

    @property
    def has_records(self) -> bool:
        return self.records is not None


def load_main_table(state: PipelineState, raw_df: pd.DataFrame) -> PipelineState:
    """판매 CSV 업로드: 레코드 전체 교체 후 국가 목록 재계산"""
    records = ingest_main_table(raw_df, state.category_map, policy=state.coercion_policy)
    state.records = records
    state.countries, state.selected_country = country_index(records)
    return state


def load_mapping_table(state: PipelineState, raw_df: pd.DataFrame) -> PipelineState:
    """매핑 CSV 업로드: 매핑 전체 교체 후 기존 레코드 카테고리 갱신"""
    category_map = build_category_map(raw_df)
    state.category_map = category_map
    if state.has_records:
        state.records = backfill_categories(state.records, category_map)
    return state


def top_n_table(state: PipelineState) -> pd.DataFrame:
    return top_n_products(
        state.records, state.selected_country, state.top_n,
        descriptor_source=state.descriptor_source,
    )


def export_merged(state: PipelineState) -> Optional[Tuple[str, bytes]]:
    if not state.has_records:
        return None
    return const.MERGED_CSV_FILENAME, to_csv_bytes(state.records)


def export_merged_excel(state: PipelineState) -> Optional[Tuple[str, bytes]]:
    if not state.has_records:
        return None
    return const.MERGED_EXCEL_FILENAME, to_excel_bytes(state.records)


def export_top_n(state: PipelineState) -> Optional[Tuple[str, bytes]]:
    if not state.has_records or not state.selected_country:
        return None
    file_name = const.TOP_N_FILENAME_FMT.format(country=state.selected_country)
    return file_name, to_csv_bytes(top_n_table(state))
