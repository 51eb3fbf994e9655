"""
Prompt construction for voice analysis, single drafts and cascade adaptation.

Every builder is a pure function of its inputs: the same profile and task
always produce byte-identical prompts.
"""

import json
from typing import Optional

from pydantic import BaseModel, ConfigDict

from dispatch.schemas.voice import RecipientContext, UserInfo, VoiceProfileData

# LinkedIn maximum post length
LINKEDIN_CHARACTER_LIMIT = 3000


class PromptPair(BaseModel):
    """System and user instructions for one generation call."""

    model_config = ConfigDict(frozen=True)

    system: str
    user: str


VOICE_ANALYSIS_SCHEMA = {
    "tone": ["adjective1", "adjective2", "adjective3"],
    "sentence_style": "short|medium|long|mixed",
    "vocabulary": "conversational|professional|technical",
    "signature_phrases": ["phrase or pattern 1", "phrase or pattern 2"],
    "topics": ["subject area 1", "subject area 2"],
    "avoid": ["word or style to avoid 1", "word or style to avoid 2"],
    "raw_summary": "2-3 sentence plain English description of how this person writes.",
}

VOICE_ANALYSIS_SYSTEM_PROMPT = f"""You are an expert writing voice analyst. Analyze the provided writing samples and return a JSON object that captures the author's distinctive voice.

Return ONLY valid JSON with exactly this structure:
{json.dumps(VOICE_ANALYSIS_SCHEMA, indent=2)}

Guidelines:
- tone: exactly 3 adjectives that capture the emotional quality of the writing
- sentence_style: one of "short", "medium", "long", or "mixed"
- vocabulary: one of "conversational", "professional", or "technical"
- signature_phrases: up to 5 distinctive phrases, sentence openers, or structural patterns this person uses
- topics: subject areas they write about based on the samples
- avoid: words, phrases, or stylistic choices that feel out of character given their samples
- raw_summary: a concise, accurate description of their writing style

Return ONLY valid JSON. No markdown, no explanation, no code blocks."""

# Rules shared by both generation tasks
_COMMON_RULES = [
    f"Keep the post under {LINKEDIN_CHARACTER_LIMIT} characters (LinkedIn maximum)",
    "Do NOT add generic calls to action they wouldn't use",
    "Do NOT use hashtags unless their own writing samples use them",
    "Return ONLY the post content — no quotes, no title, no explanation",
]

_DRAFT_RULES = [
    "Match their sentence rhythm and paragraph length exactly",
    "Use their vocabulary level — not more formal or more casual",
    'Do NOT start with "I" or a question unless their samples show that pattern',
    "Make it feel like this person sat down and wrote it themselves",
]


def _cascade_rules(recipient: RecipientContext) -> list[str]:
    return [
        "Preserve the core message and key points from the master content",
        "Rewrite it in this person's voice — their sentence rhythm, vocabulary, and patterns",
        f"Add their perspective as a {recipient.role} at {recipient.company} where natural",
    ]


def build_voice_profile_block(
    profile: VoiceProfileData,
    recipient: RecipientContext,
    phrase_hint: str = "",
) -> str:
    """Render the full voice profile for a system prompt."""
    phrases_label = "Signature phrases to weave in naturally"
    if phrase_hint:
        phrases_label = f"{phrases_label} ({phrase_hint})"

    lines = [
        f"VOICE PROFILE for {recipient.name} ({recipient.role} at {recipient.company}):",
        f"- Tone: {', '.join(profile.tone)}",
        f"- Sentence style: {profile.sentence_style} sentences",
        f"- Vocabulary level: {profile.vocabulary}",
        f"- {phrases_label}: {' | '.join(profile.signature_phrases)}",
        f"- Topics they write about: {', '.join(profile.topics)}",
        f"- AVOID these words and styles: {', '.join(profile.avoid)}",
        "",
        f"How they write: {profile.raw_summary}",
    ]
    return "\n".join(lines)


def _rules_block(rules: list[str]) -> str:
    return "\n".join(["RULES:", *[f"- {rule}" for rule in rules]])


def build_draft_prompt(
    profile: VoiceProfileData,
    recipient: RecipientContext,
    topic: str,
    raw_notes: Optional[str] = None,
) -> PromptPair:
    """Prompt for a single post on a topic, written in the recipient's voice."""
    system = "\n\n".join([
        "You are a LinkedIn ghostwriter. Write a LinkedIn post that sounds EXACTLY like "
        "the person described below — not generic AI, not a template.",
        build_voice_profile_block(
            profile,
            recipient,
            phrase_hint="don't use all of them, pick what fits",
        ),
        _rules_block(_DRAFT_RULES + _COMMON_RULES),
    ])

    user = f"Write a LinkedIn post about: {topic.strip()}"
    notes = (raw_notes or "").strip()
    if notes:
        user += f"\n\nRaw notes / bullet points to draw from:\n{notes}"

    return PromptPair(system=system, user=user)


def build_cascade_prompt(
    profile: VoiceProfileData,
    recipient: RecipientContext,
    master_content: str,
) -> PromptPair:
    """Prompt adapting a shared master message into the recipient's voice."""
    system = "\n\n".join([
        "You are a LinkedIn ghostwriter. Adapt the provided master content into a "
        "personalized LinkedIn post for a specific individual. Keep the core message "
        "intact but make it sound authentically like this person.",
        build_voice_profile_block(profile, recipient),
        _rules_block(_cascade_rules(recipient) + _COMMON_RULES),
    ])

    user = f"Adapt this master content into a LinkedIn post:\n\n{master_content.strip()}"

    return PromptPair(system=system, user=user)


def build_voice_analysis_prompt(user_info: UserInfo, samples: list[str]) -> PromptPair:
    """Prompt asking the model to describe a voice as JSON."""
    samples_text = "\n\n---\n\n".join(
        f"Sample {i}:\n{sample.strip()}" for i, sample in enumerate(samples, 1)
    )

    user = (
        f"Analyze the writing voice in these samples from {user_info.name}, "
        f"a {user_info.role} at {user_info.company} in the {user_info.industry} industry:"
        f"\n\n{samples_text}"
    )

    return PromptPair(system=VOICE_ANALYSIS_SYSTEM_PROMPT, user=user)
