"""
Prompt rendering for each research feature.

`build_prompt` is a pure transform: the same request always renders the same
`PromptSpec`, and nothing here touches the network.
"""

from typing import Optional

from .classifier import input_missing
from .errors import Result
from .models import (
    AnalysisRequest,
    CitationRequest,
    Feature,
    FeatureRequest,
    PlanningRequest,
    PromptSpec,
    SynthesisRequest,
)


DEFAULT_MODEL = "google/gemini-2.5-flash"
PLANNING_TEMPERATURE = 0.7


PLANNING_SYSTEM_PROMPT = """You are an expert AI Research Assistant specializing in breaking down complex research topics into actionable, high-quality subtopics.

When given a research topic, you must:
1. Identify 4-6 highly relevant, specific subtopics that are practical and useful for writing, analysis, or synthesis
2. Avoid generic categories like "historical context" or "future directions" unless directly critical to the research
3. Focus on concrete, research-ready areas that can yield real insights
4. For each subtopic, provide:
   - A clear, specific title
   - A concise description (2-3 sentences)
   - Why it matters to the research (importance/relevance)
   - 3-5 actionable steps for gathering insights (datasets, case studies, papers, industry applications, ethical debates)
   - A category label (e.g., "Market Analysis", "Technical Framework", "Ethics & Privacy")

Format your response as a JSON object with a "subtopics" array, where each subtopic has:
{
  "subtopics": [
    {
      "title": "string",
      "description": "string",
      "importance": "string",
      "actionSteps": ["string"],
      "category": "string"
    }
  ]
}

Be professional, research-ready, and avoid filler content. Focus on what will actually help someone conduct meaningful research."""


ANALYSIS_SYSTEM_PROMPT = """You are an AI Research Assistant that creates structured, practical research analysis outputs.

For the given research topic, generate:
1. 3-4 key insights (each 2-3 lines) that summarize important findings
2. 2-3 comparisons in table format (frameworks, tools, models, methods)
3. 3-4 visualization suggestions with specific chart types and purposes

Keep outputs professional, concise, and directly useful for real-world research.
Focus on clarity, utility, and actionable information.
Every comparison must list exactly one detail per option.
Return the response as a valid JSON object with this structure:
{
  "insights": [{"title": "string", "summary": "string"}],
  "comparisons": [{"aspect": "string", "options": ["string"], "details": ["string"]}],
  "visualizations": [{"type": "string", "description": "string", "purpose": "string"}]
}"""


CITATION_SYSTEM_PROMPT = """You are an AI Research Assistant that provides credible references and citation formatting.

When given a research topic, generate 4-6 properly formatted academic citations in the requested style (APA/MLA/Chicago).

When given an uploaded file (PDF/CSV/TXT):
- Extract key findings and summarize them in one clean paragraph
- Suggest ONE specific chart type suitable for visualizing the data
- Provide formatted citations for the document

Return the response as a valid JSON object with this structure:
{
  "citations": [{"reference": "string", "style": "string"}],
  "summary": "string (only if file uploaded)",
  "chartSuggestion": "string (only if file uploaded)"
}

Keep citations professional and accurate. For file analysis, be concise and actionable."""


SYNTHESIS_SYSTEM_PROMPT = """You are an AI Research Assistant that creates professional, structured research reports.

For the given research context, generate a comprehensive synthesis that includes:

1. Executive Summary: 5-6 lines in plain English summarizing the key findings and their significance
2. Key Insights: 3-4 major insights, each with:
   - A clear title
   - 2-3 lines of content explaining the insight
   - A specific visualization suggestion (chart type and what it should show)
3. Ethical & Real-World Implications: A paragraph discussing potential risks, ethical considerations, and practical applications
4. Recommendations: 4-5 actionable recommendations for researchers, businesses, or policymakers

Return the response as a valid JSON object with this structure:
{
  "executiveSummary": "string",
  "keyInsights": [{"title": "string", "content": "string", "visual": "string"}],
  "implications": "string",
  "recommendations": ["string"]
}

Keep the output professional, export-ready, and focused on utility. No filler content."""


SYSTEM_PROMPTS = {
    Feature.PLANNING: PLANNING_SYSTEM_PROMPT,
    Feature.ANALYSIS: ANALYSIS_SYSTEM_PROMPT,
    Feature.CITATION: CITATION_SYSTEM_PROMPT,
    Feature.SYNTHESIS: SYNTHESIS_SYSTEM_PROMPT,
}


def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def check_input(request: FeatureRequest) -> Optional[str]:
    """Return a message describing missing input, or None when usable."""
    if isinstance(request, (PlanningRequest, AnalysisRequest)):
        if _blank(request.topic):
            return "Topic is required and must be a non-empty string"
    elif isinstance(request, CitationRequest):
        if _blank(request.topic) and _blank(request.file_content):
            return "A topic or file content is required to generate citations"
    elif isinstance(request, SynthesisRequest):
        if _blank(request.context):
            return "Research context is required for synthesis"
    return None


def render_user_prompt(request: FeatureRequest) -> str:
    if isinstance(request, PlanningRequest):
        return (
            f"Research topic: {request.topic}\n\n"
            "Generate a comprehensive research plan with structured subtopics."
        )
    if isinstance(request, AnalysisRequest):
        return f"Analyze this research topic: {request.topic}"
    if isinstance(request, CitationRequest):
        if request.file_content:
            return (
                f"File uploaded: {request.file_name or 'untitled'}\n\n"
                f"File content:\n{request.file_content}\n\n"
                "Extract key findings from this file, provide a one-paragraph summary, "
                f"suggest one chart type for the data, and generate {request.style} style citations."
            )
        return (
            f"Generate properly formatted citations in {request.style} style "
            f"for research on: {request.topic}"
        )
    return f"Synthesize this research: {request.context}"


def build_prompt(request: FeatureRequest, model: str = DEFAULT_MODEL) -> Result[PromptSpec]:
    """Render the prompt for one request, or an InputMissing error."""
    problem = check_input(request)
    if problem is not None:
        return input_missing(problem)

    return PromptSpec(
        system_prompt=SYSTEM_PROMPTS[request.feature],
        user_prompt=render_user_prompt(request),
        model=model,
        temperature=PLANNING_TEMPERATURE if request.feature == Feature.PLANNING else None,
    )
