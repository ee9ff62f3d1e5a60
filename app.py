import streamlit as st

import constants as const
from csv_io import IngestionError, read_csv_upload
from pipeline import (
    PipelineState, export_merged, export_merged_excel, export_top_n,
    load_main_table, load_mapping_table, top_n_table,
)
from processor import FieldCoercionError

# 페이지 설정
st.set_page_config(page_title="Sales CSV Merger", layout="wide")

st.title("📊 판매 CSV 카테고리 병합 & 국가별 Top-N")
st.info("💡 판매 CSV에 카테고리 매핑 CSV를 합치고, 전체 데이터 또는 국가별 Top-N 집계를 CSV로 내려받는 페이지입니다.")


def get_state():
    if "pipeline" not in st.session_state:
        st.session_state["pipeline"] = PipelineState()
    return st.session_state["pipeline"]


# [콜백] 파일이 선택될 때마다 한 번만 처리
def handle_upload(kind):
    uploaded = st.session_state.get(f"{kind}_upload")
    if uploaded is None:
        return

    state = get_state()
    try:
        raw_df = read_csv_upload(uploaded.getvalue())
        if kind == "main":
            load_main_table(state, raw_df)
            # 국가 선택 박스를 첫 번째 국가로 초기화
            st.session_state["country_select"] = state.selected_country or const.ALL_COUNTRIES
            st.success(f"✅ [판매] {uploaded.name} 처리 완료 ({len(state.records):,} 행)")
        else:
            load_mapping_table(state, raw_df)
            st.success(f"✅ [매핑] {uploaded.name} 처리 완료 ({len(state.category_map):,} 개 상품)")
    except (IngestionError, FieldCoercionError) as e:
        st.error(f"❌ {uploaded.name}: {e}")


# --- 사이드바: 업로드 섹션 ---
st.sidebar.header("📁 데이터 소스 업로드")
st.sidebar.file_uploader(
    "1️⃣ 판매 데이터 (csv)", type=["csv"], key="main_upload",
    on_change=handle_upload, args=("main",),
)
st.sidebar.file_uploader(
    "2️⃣ 카테고리 매핑 (csv)", type=["csv"], key="mapping_upload",
    on_change=handle_upload, args=("mapping",),
)

state = get_state()

if not state.has_records:
    st.caption("👆 판매 CSV를 업로드하면 통합 테이블과 Top-N 설정이 표시됩니다.")
    st.stop()

# --- Top-N 설정 ---
col1, col2 = st.columns(2)
with col1:
    if "top_n" not in st.session_state:
        st.session_state["top_n"] = state.top_n
    st.number_input("Top N 개수", step=1, key="top_n")
    state.top_n = int(st.session_state["top_n"])
with col2:
    options = [const.ALL_COUNTRIES] + state.countries
    if st.session_state.get("country_select") not in options:
        st.session_state["country_select"] = state.selected_country or const.ALL_COUNTRIES
    state.selected_country = st.selectbox(
        "국가 선택",
        options=options,
        format_func=lambda c: "ALL" if c == const.ALL_COUNTRIES else c,
        key="country_select",
    )

# --- 다운로드 버튼 ---
col1, col2, col3 = st.columns(3)
merged = export_merged(state)
merged_excel = export_merged_excel(state)
top_n = export_top_n(state)
with col1:
    st.download_button(
        "💾 통합 CSV 다운로드",
        data=merged[1],
        file_name=merged[0],
        mime="text/csv",
        use_container_width=True,
    )
with col2:
    st.download_button(
        "📑 통합 Excel 다운로드",
        data=merged_excel[1],
        file_name=merged_excel[0],
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        use_container_width=True,
    )
with col3:
    if top_n:
        st.download_button(
            "🌏 국가 통계 (Top-N CSV)",
            data=top_n[1],
            file_name=top_n[0],
            mime="text/csv",
            use_container_width=True,
        )

# 결과 미리보기
st.subheader(f"🏆 Top-{state.top_n} 상품 ({'ALL' if state.selected_country == const.ALL_COUNTRIES else state.selected_country})")
st.dataframe(top_n_table(state), use_container_width=True)

st.subheader(f"📊 통합 데이터 (총 {len(state.records):,} 행)")
st.dataframe(state.records, use_container_width=True)
