"""
application.locale - Language tables for the prompt and persisted text.

Each PromptLocale bundles the labels, sentinel texts and prompt template
rendered for the end user. English is the default; the Chinese table
matches the wording the service originally shipped with.
"""

from __future__ import annotations

from dataclasses import dataclass

from domain.exceptions import ConfigurationError


@dataclass(frozen=True)
class PromptLocale:
    code: str
    male: str
    female: str
    none: str
    malformed: str
    high_blood_pressure: str
    high_blood_sugar: str
    not_provided: str
    delimiter: str
    recipe_intro: str
    prompt_template: str

    @property
    def gender_labels(self) -> tuple[str, str]:
        return (self.male, self.female)


_EN_TEMPLATE = """Recommend one medicinal diet (food therapy recipe) suitable for the following user:
Symptoms: {symptom}
Gender: {gender}
Age: {age}
Other conditions: {other_conditions}

Requirements:
1. Respond with exactly one JSON object and nothing else (no text before or after it). Keys:
   - name: recipe name (string)
   - ingredients: ingredients with amounts (array of strings, e.g. ["celery 200g", "5 red dates"])
   - steps: preparation steps (array of strings, e.g. ["Step 1...", "Step 2..."])
   - reason: why it suits the symptoms and what it does (string)
   - taboo: who should avoid it (string, e.g. "use with caution during pregnancy")
   - suitableTime: best time to eat it (string, e.g. "breakfast", "dinner")
   - tags: short tags (array of strings, e.g. ["strengthens spleen", "replenishes qi"])
2. No field may be null. Keep the content concise and accurate, in English.
3. Do not return anything that is not JSON (no explanations, no notes)."""

_ZH_TEMPLATE = """请根据以下用户健康信息，推荐1款适合的药膳：
症状：{symptom}
性别：{gender}
年龄：{age}
其他状况：{other_conditions}

要求：
1. 必须返回纯JSON格式数据（无任何前置/后置文本），包含以下字段：
   - name: 药膳名称（字符串）
   - ingredients: 制作成分（数组，如["芹菜200g", "红枣5颗"]）
   - steps: 制作步骤（数组，如["步骤1...", "步骤2..."]）
   - reason: 适合原因（字符串，说明与症状的关联，对应功效）
   - taboo: 禁忌说明（字符串，如"孕妇慎用"）
   - suitableTime: 适宜食用时间（字符串，如"早餐"、"晚餐"）
   - tags: 标签列表（数组，如["健脾", "益气"]）
2. 所有字段不可为null，内容简洁准确，用中文描述。
3. 禁止返回任何非JSON内容（如解释、备注）。"""


ENGLISH = PromptLocale(
    code="en",
    male="male",
    female="female",
    none="none",
    malformed="none (malformed)",
    high_blood_pressure="high blood pressure",
    high_blood_sugar="high blood sugar",
    not_provided="not provided",
    delimiter=", ",
    recipe_intro="A medicinal diet recommended for your health condition",
    prompt_template=_EN_TEMPLATE,
)

CHINESE = PromptLocale(
    code="zh",
    male="男",
    female="女",
    none="无",
    malformed="无（格式异常）",
    high_blood_pressure="高血压",
    high_blood_sugar="高血糖",
    not_provided="未提供",
    delimiter="、",
    recipe_intro="根据您的健康状况智能推荐的药膳",
    prompt_template=_ZH_TEMPLATE,
)

_LOCALES = {locale.code: locale for locale in (ENGLISH, CHINESE)}


def get_locale(code: str) -> PromptLocale:
    """Return the locale table for a code such as "en" or "zh"."""
    try:
        return _LOCALES[code.lower().strip()]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported PROMPT_LOCALE: '{code}'. "
            f"Must be one of: {', '.join(sorted(_LOCALES))}."
        )
