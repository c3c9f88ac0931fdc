from functools import lru_cache
from pathlib import Path
from typing import Dict, List

import yaml

# Section markers. The model is told to emit exactly these; the response
# splitter scans for them (case-insensitive).
HTML_MARKER = "### HTML CODE ###"
CSS_MARKER = "### CSS CODE ###"
JS_MARKER = "### JAVASCRIPT CODE ###"

SECTION_MARKERS = (HTML_MARKER, CSS_MARKER, JS_MARKER)


SYSTEM_PROMPT = f"""
You are a coding assistant specializing in modern UI/UX design.
Generate well-structured, responsive, and aesthetically pleasing websites
using only HTML, CSS, and vanilla JavaScript.

Rules:
- Minimalist, modern designs inspired by ShadCN UI and Magic UI
- Mobile-friendly: flexbox, grid and media queries
- Subtle animations, transitions and hover effects
- Gradients, glassmorphism and neumorphism where they help
- Do NOT add explanations, introductions or extra text

Strictly follow this format:

{HTML_MARKER}
<Insert HTML here>

{CSS_MARKER}
<Insert CSS here>

{JS_MARKER}
<Insert JavaScript here>
"""


USER_PROMPT_TEMPLATE = """
Generate a fully responsive, modern, and minimal website with a clean UI based on the following description.
The design should use smooth animations, a mobile-first approach, and follow current web design trends.

WEBSITE SPECIFICATIONS:
- Use semantic HTML5 elements for better accessibility and SEO
- Implement responsive design with proper breakpoints (mobile: 360px, tablet: 768px, desktop: 1200px+)
- Optimize for performance with modern CSS techniques (Grid/Flexbox)
- Include proper image optimization with responsive sizing

USER REQUEST: {user_prompt}

Please respond with three sections clearly marked:

{html_marker}
(full HTML code here)

{css_marker}
(full CSS code here)

{js_marker}
(JavaScript code here)
"""


def format_prompt(user_prompt: str) -> str:
    """
    Wrap the user's description into the generation instruction.
    The description is inserted verbatim.
    """
    # str.format would choke on braces inside the user's text, so the
    # template is filled first and the description spliced in last.
    head, tail = USER_PROMPT_TEMPLATE.split("{user_prompt}")
    tail = tail.format(
        html_marker=HTML_MARKER,
        css_marker=CSS_MARKER,
        js_marker=JS_MARKER,
    )
    return head + user_prompt + tail


def build_messages(user_prompt: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": format_prompt(user_prompt)},
    ]


PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"


@lru_cache(maxsize=1)
def load_example_prompts(filename: str = "example_prompts.yaml") -> List[str]:
    """
    Load the example prompts shown to users.
    """
    path = PROMPTS_DIR / filename
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    prompts = data.get("example_prompts", [])
    if not isinstance(prompts, list):
        raise ValueError(f"'example_prompts' in {path} must be a list")

    return [str(p) for p in prompts]
