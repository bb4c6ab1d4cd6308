"""Prompt template for article drafts."""

from article_drafter.api.schemas import GenerateRequest


def build_article_prompt(request: GenerateRequest) -> str:
    """Interpolate the validated request into the fixed drafting instructions.

    Output is deterministic for a given request: no dates, ids or sampling
    hints are injected.
    """
    tone = request.tone.value
    return f"""You are an expert content writer. Create a well-structured article draft based on the following information:

Topic: {request.topic}

Key Points to Cover:
{request.key_points}

Tone/Style: {tone}

Requirements:
- Write in {tone} tone
- Include an engaging introduction
- Expand on each key point in separate sections
- Add a conclusion that summarizes key takeaways
- Use markdown formatting (headers, bullet points, bold text)
- Aim for 800-1200 words
- Make it ready to publish with minimal editing

Generate the article now:"""
