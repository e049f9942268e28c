"""
LLM service module for the Activity Risk engine.

This module contains the RecommendationService class which writes short
natural-language advice for an activity scenario (a location plus its
sampled hourly forecast). Supports two modes:
- "mock": Deterministic template-based advice (offline, always available)
- "grok": Real LLM integration via Groq API (requires API key)

The decision engine never calls this service; its advice is supplementary
prose for the scenario studio.
"""

import os
from typing import Optional, Sequence

from dotenv import load_dotenv
from groq import Groq

from .risk_classifier import normalize_language
from .scenario_time_slot import ScenarioTimeSlot

load_dotenv()  # Load environment variables from .env file


PROMPT_TEMPLATES = {
    "zh": {
        "sensitivity_note": "使用者為{sensitivity}敏感族群。",
        "slot_label": "主要污染物",
        "pending": "待分析",
        "prompt": (
            "你是一位專業的空氣品質健康顧問，請根據以下資訊提供簡潔實用的建議：\n\n"
            "活動類型：{activity}\n"
            "地點：{location}\n"
            "{sensitivity_note}\n\n"
            "未來 24 小時空氣品質預測：\n"
            "{slots_summary}\n\n"
            "最佳時段：{best_time}\n"
            "最差時段：{worst_time}\n\n"
            "請提供：\n"
            "1. 針對這個活動的最佳時段建議（2-3 句）\n"
            "2. 需要注意的健康風險（1-2 句）\n"
            "3. 具體的防護措施（1-2 個要點）\n\n"
            "請用繁體中文回答，語氣友善且專業，字數控制在 150 字以內。"
        ),
    },
    "en": {
        "sensitivity_note": "User has {sensitivity} sensitivity.",
        "slot_label": "Primary pollutant",
        "pending": "To be analyzed",
        "prompt": (
            "You are a professional air quality health advisor. Please provide concise "
            "and practical recommendations based on the following information:\n\n"
            "Activity type: {activity}\n"
            "Location: {location}\n"
            "{sensitivity_note}\n\n"
            "24-hour air quality forecast:\n"
            "{slots_summary}\n\n"
            "Best time: {best_time}\n"
            "Worst time: {worst_time}\n\n"
            "Please provide:\n"
            "1. Best time recommendations for this activity (2-3 sentences)\n"
            "2. Health risks to be aware of (1-2 sentences)\n"
            "3. Specific protective measures (1-2 points)\n\n"
            "Please answer in English with a friendly and professional tone, "
            "keeping it under 150 words."
        ),
    },
}

FALLBACK_TEMPLATES = {
    "zh": {
        "risk_levels": {"low": "低", "medium": "中", "high": "高"},
        "activity_advice": {
            "low": "適合進行戶外活動",
            "medium": "敏感族群應減少戶外活動強度",
            "high": "建議改為室內活動或延後",
        },
        "protection_advice": {
            "low": "建議攜帶水壺保持水分",
            "medium": "建議配戴口罩，避免高強度運動",
            "high": "如需外出請配戴 N95 口罩，並縮短活動時間",
        },
        "default_time": "早晨時段",
        "time_advice": "建議選擇 {best_time} 進行活動",
        "monitor_advice": "請持續關注即時空氣品質",
        "template": (
            "針對「{activity}」活動分析：\n\n"
            "**最佳時段**：{best_time}，此時空氣品質相對較佳（AQI {best_aqi}）。{activity_advice}。\n\n"
            "**健康風險**：當前風險等級為{risk_level}，{time_advice}。\n\n"
            "**防護措施**：{protection_advice}。敏感族群如有不適應立即停止活動。\n\n"
            "（此為基於空氣品質數據的規則式建議，實際情況請以個人健康狀況為準）"
        ),
    },
    "en": {
        "risk_levels": {"low": "Low", "medium": "Medium", "high": "High"},
        "activity_advice": {
            "low": "Suitable for outdoor activities",
            "medium": "Sensitive groups should reduce outdoor activity intensity",
            "high": "Recommend indoor activities or postponement",
        },
        "protection_advice": {
            "low": "Recommend carrying water to stay hydrated",
            "medium": "Recommend wearing masks and avoiding high-intensity exercise",
            "high": "If going out, please wear N95 masks and shorten activity time",
        },
        "default_time": "Morning hours",
        "time_advice": "recommend choosing {best_time} for activities",
        "monitor_advice": "please continue monitoring real-time air quality",
        "template": (
            "Analysis for \"{activity}\" activity:\n\n"
            "**Best Time**: {best_time}, when air quality is relatively better (AQI {best_aqi}). {activity_advice}.\n\n"
            "**Health Risk**: Current risk level is {risk_level}, {time_advice}.\n\n"
            "**Protection Measures**: {protection_advice}. Sensitive individuals should stop "
            "immediately if experiencing discomfort.\n\n"
            "(This is a rule-based recommendation from air quality data; actual conditions "
            "should be judged by personal health status)"
        ),
    },
}

SOURCE_LLM = "grok"
SOURCE_FALLBACK = "fallback"


class RecommendationService:
    """
    Service for obtaining natural-language advice for an activity scenario.

    Supports two operation modes:
    - "mock": Uses the deterministic fallback template (default, offline)
    - "grok": Calls an LLM via Groq API (requires GROQ_API_KEY)

    Mode is selected via ACTIVITYRISK_LLM_MODE environment variable or constructor parameter.
    If mode is "grok" but API key is missing or a call fails, falls back to the template.
    The model is read from ACTIVITYRISK_LLM_MODEL (DEFAULT_MODEL_NAME if unset).
    """

    DEFAULT_MODEL_NAME = "llama-3.3-70b-versatile"
    MAX_PROMPT_SLOTS = 8  # Only the first slots are sent to the LLM
    MEDIUM_RISK_AQI = 100
    HIGH_RISK_AQI = 150

    def __init__(self, mode: Optional[str] = None):
        """
        Initialize RecommendationService with specified mode or from environment variable.

        Args:
            mode: Optional mode override ("mock" or "grok"). If None, reads from
                  ACTIVITYRISK_LLM_MODE environment variable. Defaults to "mock" if
                  not specified or invalid.
        """
        # Determine mode: explicit parameter > environment variable > default
        env_mode = os.getenv("ACTIVITYRISK_LLM_MODE", "").lower()
        self.mode = mode.lower() if mode else (env_mode if env_mode in ["mock", "grok"] else "mock")
        self.model_name = os.getenv("ACTIVITYRISK_LLM_MODEL", "").strip() or self.DEFAULT_MODEL_NAME

        self._grok_client = None
        if self.mode == "grok":
            self._grok_client = self._init_grok_client()
            if self._grok_client is None:
                self.mode = "mock"
                print("RecommendationService: Grok mode requested but unavailable, falling back to mock mode")

    def _init_grok_client(self) -> Optional[Groq]:
        """
        Initialize Groq client for LLM calls.

        Returns:
            Groq client instance if successful, None otherwise
        """
        api_key = os.getenv("GROQ_API_KEY")
        if not api_key:
            print("RecommendationService: GROQ_API_KEY not found, Grok mode unavailable")
            return None

        try:
            return Groq(api_key=api_key)
        except Exception as e:
            print(f"RecommendationService: Failed to initialize Grok client: {e}")
            return None

    def get_recommendation(
        self,
        activity: str,
        location: str,
        time_slots: Sequence[ScenarioTimeSlot],
        best_time: Optional[str] = None,
        worst_time: Optional[str] = None,
        language: str = "zh",
        sensitivity: Optional[str] = None,
    ) -> tuple[str, str]:
        """
        Gets advice for an activity scenario.

        Delegates to the LLM in grok mode and falls back to the template if
        the call fails or returns nothing.

        Args:
            activity: Activity name
            location: Location name
            time_slots: Sampled forecast slots, chronologically ordered
            best_time: Optional "HH:00" label of the best slot
            worst_time: Optional "HH:00" label of the worst slot
            language: "zh" or "en"
            sensitivity: Optional sensitivity group of the user

        Returns:
            A tuple containing:
            - str: The advice text
            - str: Its source, "grok" or "fallback"
        """
        language = normalize_language(language)
        if self.mode == "grok":
            text = self._recommend_grok(activity, location, time_slots, best_time, worst_time, language, sensitivity)
            if text:
                return (text, SOURCE_LLM)
        return (self._recommend_fallback(activity, time_slots, best_time, language), SOURCE_FALLBACK)

    def build_prompt(
        self,
        activity: str,
        location: str,
        time_slots: Sequence[ScenarioTimeSlot],
        best_time: Optional[str] = None,
        worst_time: Optional[str] = None,
        language: str = "zh",
        sensitivity: Optional[str] = None,
    ) -> str:
        """Builds the LLM prompt from at most MAX_PROMPT_SLOTS slots."""
        template = PROMPT_TEMPLATES[normalize_language(language)]
        slots_summary = "\n".join(
            f"- {slot.time}: AQI {slot.aqi} ({slot.category}), "
            f"{template['slot_label']}: {slot.dominant_pollutant}"
            for slot in time_slots[: self.MAX_PROMPT_SLOTS]
        )
        sensitivity_note = template["sensitivity_note"].format(sensitivity=sensitivity) if sensitivity else ""
        return template["prompt"].format(
            activity=activity,
            location=location,
            sensitivity_note=sensitivity_note,
            slots_summary=slots_summary,
            best_time=best_time or template["pending"],
            worst_time=worst_time or template["pending"],
        )

    def _recommend_grok(
        self,
        activity: str,
        location: str,
        time_slots: Sequence[ScenarioTimeSlot],
        best_time: Optional[str],
        worst_time: Optional[str],
        language: str,
        sensitivity: Optional[str],
    ) -> Optional[str]:
        """
        LLM implementation: calls the Groq API for advice.

        Returns:
            The stripped response text, or None if the call fails or the
            response is empty
        """
        if self._grok_client is None:
            return None

        prompt = self.build_prompt(activity, location, time_slots, best_time, worst_time, language, sensitivity)
        try:
            chat_completion = self._grok_client.chat.completions.create(
                messages=[{"role": "user", "content": prompt}],
                model=self.model_name,
                temperature=0.7,
                max_tokens=400,
            )
            response_text = (chat_completion.choices[0].message.content or "").strip()
        except Exception as e:
            print(f"RecommendationService: Grok API call failed: {e}")
            return None

        if not response_text:
            print("RecommendationService: Empty response from Grok, using fallback")
            return None
        return response_text

    def _recommend_fallback(
        self,
        activity: str,
        time_slots: Sequence[ScenarioTimeSlot],
        best_time: Optional[str],
        language: str,
    ) -> str:
        """
        Template implementation: deterministic advice from the forecast.

        The average AQI picks the risk key: low (<= 100), medium (<= 150),
        high (> 150). The best slot is the lowest-AQI slot, earliest on ties.
        """
        template = FALLBACK_TEMPLATES[language]

        average_aqi = sum(slot.aqi for slot in time_slots) / max(len(time_slots), 1)
        if average_aqi > self.HIGH_RISK_AQI:
            risk_key = "high"
        elif average_aqi > self.MEDIUM_RISK_AQI:
            risk_key = "medium"
        else:
            risk_key = "low"

        best_slot = min(time_slots, key=lambda slot: slot.aqi) if time_slots else None

        if best_time:
            time_advice = template["time_advice"].format(best_time=best_time)
        else:
            time_advice = template["monitor_advice"]

        return template["template"].format(
            activity=activity,
            best_time=best_slot.time if best_slot else template["default_time"],
            best_aqi=best_slot.aqi if best_slot else "N/A",
            activity_advice=template["activity_advice"][risk_key],
            risk_level=template["risk_levels"][risk_key],
            time_advice=time_advice,
            protection_advice=template["protection_advice"][risk_key],
        )
