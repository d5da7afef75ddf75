from jobhunter.services.llm_client import call_perplexity

SYSTEM_PROMPT = "You are a helpful career advisor and company analyst."


def build_prompt(company_name: str, context: str | None = None) -> str:
    context_part = f" (Context: {context})" if context else ""
    return (
        f'Analyze the company "{company_name}"{context_part} for a potential job applicant.\n'
        "Provide a detailed report in Markdown format covering:\n"
        "1. **Company Overview**: Brief history and mission.\n"
        "2. **Work Culture**: What employees say about work-life balance, management, and values.\n"
        "3. **Recent News**: Any major recent events, funding, or layoffs.\n"
        "4. **Interview Process**: Common questions and what to expect.\n"
        "5. **Red Flags**: Any potential concerns for applicants.\n\n"
        "Keep it concise but informative. Use bullet points."
    )


def research_company(company_name: str, context: str | None = None) -> str:
    """Markdown company report from Perplexity."""
    return call_perplexity(SYSTEM_PROMPT, build_prompt(company_name, context), temperature=0.2)
