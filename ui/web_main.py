"""
Web UI module for the Activity Risk engine.

This module provides a Streamlit-based web interface over the decision
engine. Supports three modes: Manual input (sliders for AQI and pollutants),
Simulation case (preset air quality scenarios) and Scenario studio (24-hour
analysis of one activity with supplementary advice).
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Add project root to Python path to enable imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pandas as pd
import streamlit as st

from activityrisk.action_hud import build_action_hud
from activityrisk.decision_engine import DecisionEngine
from activityrisk.decision_log import DecisionLog
from activityrisk.forecast_simulator import ForecastSimulator
from activityrisk.llm_service import RecommendationService
from activityrisk.pollutant_sample import Concentration, PollutantSample
from activityrisk.scenario_studio import ScenarioStudio
from activityrisk.scoring_profile import PROFILES


SIMULATION_CASES = {
    "Clean morning": {"aqi": 35, "pm25": 8.0, "pm10": 20.0, "o3": 30.0},
    "Moderate traffic": {"aqi": 85, "pm25": 28.0, "pm10": 60.0, "o3": 55.0},
    "Ozone afternoon": {"aqi": 120, "pm25": 20.0, "pm10": 45.0, "o3": 115.0},
    "Smoke event": {"aqi": 210, "pm25": 140.0, "pm10": 190.0, "o3": 40.0},
}

POLLUTANT_UNITS = {"pm25": "µg/m³", "pm10": "µg/m³", "o3": "ppb"}
POLLUTANT_NAMES = {"pm25": "PM2.5", "pm10": "PM10", "o3": "O3"}


def build_pollutants(values: dict[str, float]) -> list[PollutantSample]:
    """Turns {code: value} into pollutant samples, skipping zero readings."""
    return [
        PollutantSample(
            code=code,
            display_name=POLLUTANT_NAMES.get(code, code.upper()),
            concentration=Concentration(value=value, units=POLLUTANT_UNITS.get(code, "")),
        )
        for code, value in values.items()
        if value > 0
    ]


def get_engine(profile_name: str, language: str, enable_logging: bool) -> DecisionEngine:
    """Returns an engine for the chosen settings, cached in session state."""
    key = (profile_name, language, enable_logging)
    if st.session_state.get("engine_key") != key:
        st.session_state.engine = DecisionEngine(
            profile=PROFILES[profile_name],
            language=language,
            decision_log=DecisionLog() if enable_logging else None,
        )
        st.session_state.engine_key = key
    return st.session_state.engine


def render_risk_matrix(frame: pd.DataFrame) -> None:
    """Renders the risk matrix with each row tinted by its risk color."""
    def tint(row: pd.Series) -> list[str]:
        return [f"background-color: {row['color']}33"] * len(row)

    visible = frame.drop(columns=["color"])
    styled = frame.style.apply(tint, axis=1)
    st.dataframe(styled, column_order=list(visible.columns), use_container_width=True, hide_index=True)


def main() -> None:
    """
    Main function that runs the Streamlit web interface.

    Sets up the page layout, collects current conditions for the selected
    mode, evaluates all activities and displays the risk matrix, the Action
    HUD and, in scenario mode, the 24-hour analysis.
    """
    st.set_page_config(page_title="Activity Risk Decision Support", layout="wide")
    st.title("Activity Risk Decision Support")

    mode = st.sidebar.selectbox(
        "Mode",
        ["Manual input", "Simulation case", "Scenario studio"],
        help="Manual input (testing), Simulation case (demo) or Scenario studio (24-hour analysis)",
    )
    profile_name = st.sidebar.selectbox("Scoring profile", list(PROFILES), index=0)
    language = st.sidebar.radio("Language", ["zh", "en"], horizontal=True)
    enable_logging = st.sidebar.checkbox("Write decision log", value=False)
    seed: Optional[int] = st.sidebar.number_input("Forecast seed", min_value=0, value=42, step=1)

    engine = get_engine(profile_name, language, enable_logging)

    left_col, right_col = st.columns(2)

    with left_col:
        st.header("Current Conditions")

        if mode == "Simulation case":
            case_name = st.selectbox("Select scenario", list(SIMULATION_CASES))
            case = SIMULATION_CASES[case_name]
            aqi = case["aqi"]
            pollutant_values = {code: case[code] for code in ("pm25", "pm10", "o3")}
            st.caption("Scenario values:")
            st.text(f"AQI: {aqi}")
            for code, value in pollutant_values.items():
                st.text(f"{POLLUTANT_NAMES[code]}: {value} {POLLUTANT_UNITS[code]}")
        else:
            aqi = st.slider("AQI", min_value=0, max_value=500, value=80)
            pollutant_values = {
                "pm25": st.slider("PM2.5 (µg/m³)", min_value=0.0, max_value=250.0, value=25.0),
                "pm10": st.slider("PM10 (µg/m³)", min_value=0.0, max_value=400.0, value=50.0),
                "o3": st.slider("O3 (ppb)", min_value=0.0, max_value=200.0, value=40.0),
            }

        hours = st.slider("Forecast hours", min_value=1, max_value=96, value=24)

        pollutants = build_pollutants(pollutant_values)
        forecast = ForecastSimulator(seed=int(seed)).simulate(
            base_aqi=aqi,
            hours=hours,
            start=datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0),
            pollutants=pollutants,
        )

        meta = forecast.meta
        st.metric("Forecast confidence", f"{meta.confidence_score} ({meta.confidence_level})")
        st.caption(meta.confidence_description)
        st.line_chart(
            pd.DataFrame(
                {"AQI": [slot.aqi for slot in forecast.hourly_forecasts]},
                index=[slot.date_time for slot in forecast.hourly_forecasts],
            )
        )

    decisions = engine.evaluate_default(aqi, pollutants, forecast.hourly_forecasts)
    hud = build_action_hud(decisions, language=language)

    with right_col:
        st.header("Action HUD")
        for suggestion in hud.suggestions:
            with st.container(border=True):
                st.markdown(f"**{suggestion.title}** · {suggestion.severity}")
                st.write(suggestion.description)
                if suggestion.best_time_text:
                    st.caption(f"🕒 {suggestion.best_time_text}")
                st.button(suggestion.cta_label, key=f"cta_{suggestion.activity_id}")

        if hud.dominant_risk is not None:
            dominant = hud.dominant_risk
            st.warning(
                f"Highest risk: {dominant.activity.icon} {dominant.activity.name} "
                f"({dominant.risk_score.score}, {dominant.risk_score.label})"
            )

    st.divider()
    st.header("Risk Matrix")
    render_risk_matrix(engine.decisions_to_frame(decisions))

    with st.expander("Pollutant breakdown", expanded=False):
        if decisions and decisions[0].pollutant_breakdown:
            st.bar_chart(
                pd.DataFrame(
                    {
                        "contribution": [entry.contribution for entry in decisions[0].pollutant_breakdown],
                    },
                    index=[entry.display_name for entry in decisions[0].pollutant_breakdown],
                )
            )
        else:
            st.write("No pollutant readings supplied.")

    if mode == "Scenario studio":
        st.divider()
        st.header("Scenario Studio")
        activity = st.selectbox(
            "Activity",
            list(engine.catalog),
            format_func=lambda template: f"{template.icon} {template.name}",
        )
        location = st.text_input("Location", value="目標地點")
        studio = ScenarioStudio(RecommendationService())
        analysis = studio.analyze(activity.name, location, forecast.hourly_forecasts, language=language)

        st.metric("Average AQI", analysis.average_aqi)
        st.write(f"Best: {analysis.best_time_slot.time} (AQI {analysis.best_time_slot.aqi})")
        st.write(f"Worst: {analysis.worst_time_slot.time} (AQI {analysis.worst_time_slot.aqi})")
        st.dataframe(
            [
                {
                    "Time": slot.time,
                    "AQI": slot.aqi,
                    "Category": slot.category,
                    "Risk": slot.risk_level,
                }
                for slot in analysis.time_slots
            ],
            use_container_width=True,
        )
        st.info(analysis.recommendation)
        st.caption(f"Source: {analysis.recommendation_source}")

    with st.expander("View decisions as JSON"):
        st.json([decision.to_dict() for decision in decisions])


if __name__ == "__main__":
    main()
