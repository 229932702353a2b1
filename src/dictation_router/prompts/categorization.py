"""Prompt for LLM-assisted categorization with ICD-10 coding.

The field names in the JSON contract (``categorizations``, ``sectionId``,
``content``, ``confidence``, ``icd10Codes``, ``summary``) are parsed
verbatim by ``AICategorizer`` and must not be renamed.
"""

from __future__ import annotations

from dictation_router.models import Template

CATEGORIZE_TRANSCRIPTION_PROMPT = """
You are a medical AI assistant specializing in clinical documentation. Analyze the following medical transcription and categorize the content into the appropriate template sections. Also provide relevant ICD-10 codes where applicable.

Transcription to analyze:
"{transcription}"

Template sections available:
{sections}

Instructions:
1. Carefully read the transcription and identify medical content
2. Categorize each relevant piece of information into the most appropriate section
3. For symptoms and diagnoses, include relevant ICD-10 codes with descriptions
4. Maintain the exact wording from the transcription when possible
5. Only include content that clearly belongs to a section
6. Provide a confidence score (0-1) for each categorization
7. Create a brief summary of the key medical points

Return your response as a JSON object with this exact structure:
{{
  "categorizations": [
    {{
      "sectionId": "section id from the list above",
      "content": "extracted content from transcription",
      "confidence": 0.95,
      "icd10Codes": [
        {{
          "code": "R50.9",
          "description": "Fever, unspecified"
        }}
      ]
    }}
  ],
  "summary": "Brief summary of key medical findings and recommendations"
}}

Notes:
- Only include icd10Codes for sections related to symptoms, diagnoses, or conditions
- Use the most specific ICD-10 codes available
- Confidence should reflect how certain you are about the categorization
- Preserve medical terminology and exact phrases from the original transcription
- If no relevant content is found for a section, don't include it in the response
- Directly return JSON only."""


def render_sections(template: Template) -> str:
    """One instruction line per section: title, type, id and placeholder hint."""
    return "\n".join(
        f"- {s.title} ({s.type.value}) [id: {s.id}]: {s.placeholder}"
        for s in template.sections
    )


def build_categorization_prompt(transcription: str, template: Template) -> str:
    return CATEGORIZE_TRANSCRIPTION_PROMPT.format(
        transcription=transcription,
        sections=render_sections(template),
    )
