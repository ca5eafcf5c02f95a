# FILE: xalgrow/services/prompt_service.py
#
# System/user prompts for the AI proxy endpoints. Kept in one place so the
# OpenAI and Anthropic paths send exactly the same instructions.

from xalgrow.schemas.generate import PlannedFile

CODE_ASSISTANT_SYSTEM_PROMPT = (
    "You are a coding assistant that generates clean, well-commented code based on user requests. "
    "Provide only code without additional explanation."
)

FILE_STRUCTURE_SYSTEM_PROMPT = """You are an expert at creating React applications. Given a description of an app, generate a file structure with a list of necessary files for a complete, working application.
Respond with a JSON object that has a "files" property containing an array of file objects. Each file object should have "name", "path", and "description" properties.
The files should form a complete, working application that meets the user's requirements.
For React apps, include .jsx or .tsx files. Include CSS files where needed.
ONLY respond with the JSON object and nothing else."""

FILE_CONTENT_SYSTEM_PROMPT = """You are an expert React developer. Generate the contents of the file described below for an app with this description: "{description}".
The file should be well-structured, properly commented, and follow best practices.
Only output the code, no explanations."""


def build_structure_user_prompt(description: str) -> str:
    return f"Create a file structure for the following app: {description}"


def build_file_system_prompt(description: str) -> str:
    return FILE_CONTENT_SYSTEM_PROMPT.format(description=description)


def build_file_user_prompt(planned: PlannedFile) -> str:
    target = f"{planned.path.rstrip('/')}/{planned.name}" if planned.path else planned.name
    return f"Generate the contents for: {target}\nDescription: {planned.description}"
