"""Prompt templating helpers and the prompts used by each route."""
from __future__ import annotations
import re

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")

FLOWCHART_PREFIX = "Create a flowchart of"

# Voice chatbot
TRANSCRIBE_SYSTEM = "You are a helpful AI assistant. Respond concisely and accurately to the user's input."
AI_RESPONSE_SYSTEM = "You are a helpful AI assistant."

# Creative writer
EDITOR_SYSTEM = "You are a helpful AI assistant that edits and improves text."
GENERATE_TEXT_USER = (
    "Please edit and improve the following text based on this prompt: {{prompt}}\n\n"
    "Text: {{text}}\n\n"
    "Edited Text:"
)
GROQ_COMPLETION_USER = (
    "Please edit and improve the following text:\n\n"
    "{{text}}\n\n"
    "Provide your reasoning for the changes."
)
CREATIVE_SYSTEM = """\
You are a creative writing assistant focused on enhancing and refining text while maintaining the author's voice and intent. Your task is to:

1. Understand the user's prompt and their desired changes
2. Carefully edit the provided text to fulfill the prompt's requirements
3. Maintain the original tone and style where appropriate
4. Ensure the edits are coherent and flow naturally
5. Only output the final edited text without any explanations or metadata

Remember: Your response should contain only the edited text, nothing else."""
CREATIVE_USER = "Original Text: {{text}}\n\nEditing Request: {{prompt}}\n\nModified Text:"

# Code editor
CODE_CHAT_SYSTEM = (
    "You are an expert coding assistant, specialized in providing high-quality code solutions. "
    "Provide clear, efficient, and well-documented code examples. "
    "When sharing code, always use markdown code blocks with the appropriate language syntax. "
    "Explain complex concepts in simple terms and suggest best practices. "
    "Focus on writing maintainable, efficient, and secure code."
)
CODE_GENERATE_SYSTEM = (
    "You are an expert coding assistant, specialized in {{language}} development. "
    "Generate high-quality, efficient, and well-documented code based on the user's prompt. "
    "If there's existing code, modify or extend it as requested. "
    "Always wrap code in markdown code blocks with the appropriate language syntax. "
    "Focus on writing maintainable, efficient, and secure code."
)
CODE_GENERATE_USER = "Current code:\n\n{{current_code}}\n\nUser request: {{prompt}}"

# Flowchart generator
ENHANCE_SYSTEM = (
    "You are an AI assistant specialized in creating prompts for flowchart generation. "
    "Your task is to enhance user inputs to create clear, structured prompts that always begin with "
    "'Create a flowchart of' and focus for enhancing prompts. "
    "Limit the enhanced prompt to a maximum of 30 words."
)
ENHANCE_USER = (
    'Enhance this prompt to create a flowchart: "{{input}}". '
    "The enhanced prompt should focus on enhancing the prompt. "
    "Always start with 'Create a flowchart of' if it's not already present. "
    "Make it structured and detailed, suitable for generating a clear and informative flowchart. "
    "Limit the response to 30 words maximum."
)
FLOWCHART_SYSTEM = """\
You are a specialized flowchart generation AI that outputs only valid Mermaid syntax.
You will be asked to create flowcharts based on descriptions.
Always output ONLY the Mermaid code without any markdown formatting, explanations, or extra text.
Never include ```mermaid or any other backticks in your response.
Focus on clarity and logical flow in the diagrams you create.
Use appropriate node shapes: rectangular ([]), round-edged (()), and diamond ({}) for different elements.
For complex flows, use subgraphs to organize related steps.
Ensure all node connections are logical and flow naturally.
IMPORTANT: Keep diagrams concise and focused. Limit to 10-15 nodes maximum for better readability.
Avoid creating overly complex diagrams with too many connections or nested structures.
NEVER use reserved keywords like 'end', 'subgraph', 'graph', 'flowchart', 'class', 'click', or 'style' as node IDs."""
FLOWCHART_USER = """\
Generate a Mermaid flowchart code for the following description: {{input}}

Please follow these guidelines:
1. Start the flowchart with 'graph {{orientation}}' for a {{direction}} flowchart.
2. Use proper Mermaid syntax for nodes and connections.
3. Use descriptive IDs for nodes that relate to their content (e.g., login, process, decision).
4. Use square brackets for rectangular nodes, e.g., login["Login"].
5. Use parentheses for round-edged nodes, e.g., process("Process").
6. Use curly braces for diamond shapes (decisions), e.g., decision{"Decision"}.
7. Use '-->' for connections between nodes.
8. You can use |text| for labels on connections.
9. For complex flowcharts with many nodes, consider using subgraphs to organize related nodes.
10. ONLY output the Mermaid code, without backticks or any explanations.
11. Ensure proper indentation for readability.
12. DO NOT include the mermaid keyword or any markdown.
13. IMPORTANT: Keep the flowchart concise and focused. Limit to no more than 10-15 nodes for better readability.
14. Avoid creating overly complex diagrams with too many connections or nested structures.
15. NEVER use reserved keywords like 'end', 'subgraph', 'graph', 'flowchart', 'class', 'click', or 'style' as node IDs."""
MERMAID_FIX_SYSTEM = (
    "You are a specialized Mermaid syntax validator and corrector. Your task is to analyze Mermaid "
    "flowchart code, identify any syntax errors or issues, and provide corrected code.\n"
    "Only output the corrected Mermaid code without any explanations, comments, or markdown formatting.\n"
    "If the code is already valid, return it unchanged.\n"
    "Focus on making minimal changes to fix the code while preserving the original intent and structure."
)
MERMAID_FIX_USER = """\
I need you to validate and correct this Mermaid flowchart code:

```
{{code}}
```

Please analyze this code for any syntax errors or issues that would prevent it from rendering properly.
If you find any issues, correct them and return ONLY the fixed Mermaid code.
If the code is already valid, just return the original code.

Common issues to check for:
1. Missing or incorrect graph declaration (should start with "graph TD" or similar)
2. Invalid node IDs (should be alphanumeric)
3. Unclosed quotes in node labels
4. Missing arrows between connected nodes
5. Incorrect syntax for node shapes ([], (), {}, etc.)
6. Unclosed subgraphs
7. Ensure all nodes referenced in connections are defined

Return ONLY the corrected Mermaid code without any explanations or markdown formatting."""

_HORIZONTAL_HINTS = (
    "timeline", "sequence", "step by step", "progression", "evolution", "history", "chronological",
    "succession", "presidents", "kings", "rulers", "dynasty", "lineage", "generations",
)
_VERTICAL_HINTS = (
    "hierarchy", "organization", "reporting", "structure", "tree", "parent", "child", "descendant",
    "inheritance", "taxonomy", "classification", "category", "decision",
)
_CODE_FENCE = re.compile(r"```(?:mermaid)?\n?")
_GRAPH_DECLARATION = re.compile(r"^(?:graph|flowchart)\s+(?:TB|TD|BT|RL|LR)")

# Image description collector
DESCRIBE_IMAGE_INSTRUCTION = (
    "Begin each of the following with a triangle symbol (▲ U+25B2): "
    "First, a brief description of the image to be used as alt text. "
    "Do not describe or extract text in the description. "
    "Second, the text extracted from the image, with newlines where applicable. "
    "If there is no text in the image, only respond with the description. "
    "Do not include any other information."
)


def render_prompt(template: str, **values: str) -> str:
    """
    Render values into a template in a single pass.

    Args:
        template: Template content containing {{name}} placeholders.
        values: Replacement text per placeholder name.

    Returns:
        Rendered prompt. Unknown placeholders are left as-is, and placeholders
        inside substituted values are not expanded again.
    """
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def clip_input(text: str, limit: int = 300) -> str:
    """Trim and cap free-form voice input."""
    return text.strip()[:limit]


def limit_word_count(text: str, max_words: int) -> str:
    words = text.split()
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]) + "..."


def finish_flowchart_prompt(raw: str, max_words: int = 30) -> str:
    """Force the flowchart prefix onto a model answer and cap its length."""
    prompt = raw.strip()
    if not prompt.startswith(FLOWCHART_PREFIX):
        prompt = f"{FLOWCHART_PREFIX} {prompt}"
    return limit_word_count(prompt, max_words)


def cap_description(text: str, limit: int = 2000) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def detect_orientation(description: str) -> str:
    """
    Pick a flowchart direction from keywords in the description.

    Returns:
        "LR" when timeline-like words outnumber hierarchy-like words, else "TD".
    """
    lowered = description.lower()
    horizontal = sum(1 for hint in _HORIZONTAL_HINTS if hint in lowered)
    vertical = sum(1 for hint in _VERTICAL_HINTS if hint in lowered)
    return "LR" if horizontal > vertical else "TD"


def strip_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text).strip()


def has_graph_declaration(code: str) -> bool:
    return bool(_GRAPH_DECLARATION.match(code))
