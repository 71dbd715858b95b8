# File: landpro/services/prompts.py

"""
Prompt text for the quote estimator and the land analyst.
"""

from typing import Optional

from landpro.gis.geometry import SQUARE_METERS_PER_ACRE


# ============================================================
# QUOTES
# ============================================================

QUOTE_SYSTEM_PROMPT = (
    "You are LandPro AI, a professional landscaping cost estimator. "
    "Always respond with valid JSON only, no markdown formatting or additional text."
)

QUOTE_TOOL_NAME = "create_quote"

QUOTE_TOOL = {
    "type": "function",
    "function": {
        "name": QUOTE_TOOL_NAME,
        "description": "Return an itemized landscaping project estimate.",
        "parameters": {
            "type": "object",
            "properties": {
                "jobTitle": {"type": "string", "description": "Brief descriptive title, max 50 characters"},
                "laborCost": {"type": "number", "description": "Labor cost in USD"},
                "equipmentCost": {"type": "number", "description": "Equipment cost in USD"},
                "materialCost": {"type": "number", "description": "Material cost in USD"},
                "completionTime": {"type": "number", "description": "Estimated completion time in days"},
                "notes": {"type": "string", "description": "Professional notes about the project"},
            },
            "required": ["jobTitle", "laborCost", "materialCost", "completionTime", "notes"],
            "additionalProperties": False,
        },
    },
}


def build_quote_prompt(
    client_name: str,
    job_description: str,
    property_size: float,
    property_unit: str,
    material_notes: Optional[str] = None,
    json_reply: bool = True,
) -> str:
    lines = [
        "You are LandPro AI, an expert in landscaping and land management quotes.",
        "Based on the details below, generate a professional, itemized project estimate.",
        "",
        f"Client: {client_name}",
        f"Job Description: {job_description}",
        f"Property Size: {property_size:g} {property_unit}",
    ]
    if material_notes:
        lines.append(f"Materials/Notes: {material_notes}")
    lines += [
        "",
        "Provide a detailed breakdown including:",
        "1. A brief job title (max 50 characters)",
        "2. Labor cost (in USD)",
        "3. Equipment cost (in USD)",
        "4. Material cost (in USD)",
        "5. Estimated completion time (in days)",
        "6. Professional notes about the project",
        "",
        "Consider factors like:",
        "- Property size and terrain complexity",
        "- Type of work (clearing, grading, mulching, maintenance, etc.)",
        "- Equipment rental and labor requirements",
        "- Material costs specific to the job type",
        "- Debris removal and finishing work",
    ]
    if json_reply:
        lines += [
            "",
            "Respond ONLY with a valid JSON object in this exact format:",
            "{",
            '  "jobTitle": "Brief descriptive title",',
            '  "laborCost": number,',
            '  "equipmentCost": number,',
            '  "materialCost": number,',
            '  "completionTime": number,',
            '  "notes": "Professional notes about the project"',
            "}",
        ]
    return "\n".join(lines)


# ============================================================
# LAND ANALYSIS
# ============================================================

ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert land analysis AI for landscaping professionals. "
    "Always respond with valid JSON only, no markdown or extra text."
)

_ANALYSIS_JSON_SHAPE = """{
  "vegetation": {
    "type": "string describing likely vegetation type (e.g., mixed grass, wooded, brush)",
    "density": "low/medium/high",
    "recommendations": ["array of vegetation management recommendations"]
  },
  "terrain": {
    "type": "string describing likely terrain (e.g., flat, rolling hills, steep)",
    "slope_estimate": "percentage range estimate",
    "drainage": "good/moderate/poor",
    "recommendations": ["array of terrain-related recommendations"]
  },
  "equipment": {
    "recommended": ["array of recommended equipment types"],
    "considerations": ["array of equipment considerations based on terrain/vegetation"]
  },
  "labor": {
    "estimated_crew_size": number,
    "estimated_hours": number,
    "difficulty": "easy/moderate/challenging"
  },
  "hazards": ["array of potential hazards to watch for"],
  "cost_factors": {
    "base_rate_per_acre": number,
    "estimated_total": number,
    "factors_affecting_cost": ["array of cost factors"]
  },
  "summary": "2-3 sentence summary of the analysis"%s
}"""

_NEXT_STEPS_FIELD = ',\n  "next_steps": ["ordered list of concrete next steps"]'

# Focus areas per land-use goal
INTENT_FOCUS = {
    "build": (
        "The owner intends to BUILD on this land (construction or development).",
        [
            "buildable area and suitable pad locations",
            "grading, compaction and drainage needed before foundations",
            "access for construction vehicles",
            "clearing required for the building footprint",
        ],
    ),
    "clear": (
        "The owner intends to CLEAR this land (brush clearing, grading or site prep).",
        [
            "vegetation volume and the clearing method (mulching, grubbing, hauling)",
            "debris disposal and burn or haul-off options",
            "erosion control after clearing",
            "equipment sized to the vegetation density",
        ],
    ),
    "farm": (
        "The owner intends to FARM this land.",
        [
            "likely soil quality and tillable acreage",
            "irrigation and drainage",
            "fencing and access lanes",
            "work needed to convert existing vegetation to pasture or crops",
        ],
    ),
    "evaluate": (
        "The owner wants a general EVALUATION of this land (assessment and valuation).",
        [
            "overall condition and usable acreage",
            "improvements that would add the most value",
            "risks that could affect value",
            "rough maintenance costs",
        ],
    ),
}


def format_coordinate(lon: float, lat: float) -> str:
    """``34.0522°N, 118.2437°W`` style, hemisphere taken from the sign."""
    ns = "N" if lat >= 0 else "S"
    ew = "E" if lon >= 0 else "W"
    return f"{abs(lat):.4f}°{ns}, {abs(lon):.4f}°{ew}"


def build_analysis_prompt(
    acreage: float,
    centroid: tuple,
    vertex_count: int,
    location: Optional[str] = None,
    intent: Optional[str] = None,
) -> str:
    lon, lat = centroid
    lines = [
        "You are an AI land analysis expert for landscaping professionals. "
        "Analyze this land parcel and provide detailed recommendations.",
        "",
        "Land Details:",
        f"- Area: {acreage:g} acres ({acreage * SQUARE_METERS_PER_ACRE:.0f} square meters)",
        f"- Location coordinates: {format_coordinate(lon, lat)}",
        f"- Polygon vertices: {vertex_count} points",
    ]
    if location:
        lines.append(f"- Address/Location: {location}")

    focus = INTENT_FOCUS.get(intent) if intent else None
    if focus:
        goal, areas = focus
        lines += ["", goal, "Focus your analysis on:"]
        lines += [f"- {a}" for a in areas]
        lines += ["Finish with concrete next steps for this goal in next_steps."]

    lines += [
        "",
        "Based on typical land characteristics for this region and size, provide a "
        "comprehensive analysis in the following JSON format:",
        "",
        _ANALYSIS_JSON_SHAPE % (_NEXT_STEPS_FIELD if focus else ""),
        "",
        "Provide realistic estimates based on the acreage and typical conditions. "
        "Be specific and actionable in recommendations.",
    ]
    return "\n".join(lines)
