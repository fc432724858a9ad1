from pathlib import Path

PROMPTS_DIR = Path(__file__).resolve().parent

RECIPE_SYSTEM_PROMPT = PROMPTS_DIR / "RECIPE_SYSTEM_PROMPT.txt"
FILE_CLASSIFICATION_PROMPT = PROMPTS_DIR / "FILE_CLASSIFICATION_PROMPT.txt"
