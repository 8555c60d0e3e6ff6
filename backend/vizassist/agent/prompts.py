"""
prompts.py — Prompts for the Chart Detection Model

The detection call sends one chart image plus this instruction and asks
for JSON matching DETECTION_FIELDS.
"""

DETECTION_PROMPT = """Analyze this chart image. Identify the chart type.
Provide a confidence score (0-100).
Provide a short explanation.
Provide example R code (using ggplot2) to recreate a similar chart.
Provide example Python code (using seaborn) to recreate a similar chart.

Return JSON with keys: chartType, confidence, explanation, rCode, pythonCode."""

# key -> JSON type, in the order the model should emit them
DETECTION_FIELDS = {
    "chartType": "STRING",
    "confidence": "NUMBER",
    "explanation": "STRING",
    "rCode": "STRING",
    "pythonCode": "STRING",
}
