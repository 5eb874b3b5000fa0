"""
Prompt templates for renovation, magic edit, budget analysis and chat
"""
from podmayak.schemas.renovation import RenovationAnalysis, RenovationConfig

CHAT_SYSTEM_INSTRUCTION = (
    "Sən Podmayak AI, peşəkar interyer dizayner və təmir ustasısan. "
    "İstifadəçilərə 'podmayak' mənzillərin təmiri, dizayn üslubları, material seçimi və büdcə planlaması "
    "barədə Azərbaycan dilində məsləhət verirsən. Cavabların səmimi, praktiki və köməkçi olmalıdır."
)

DEFAULT_COUNTRY = "Azerbaijan"


def build_renovation_prompt(config: RenovationConfig) -> str:
    """Image-to-image renovation prompt: structure is fixed, only materials and furniture change"""
    if config.selected_furniture:
        furniture_instruction = (
            f"- Required Furniture Elements: {', '.join(config.selected_furniture)}. "
            "Place these naturally within the existing layout, respecting the room's scale."
        )
    else:
        furniture_instruction = ""

    if config.color_preference:
        color_instruction = f"Color Palette: {', '.join(config.color_preference)}"
    else:
        color_instruction = "Color Palette: Neutral and harmonious"

    dimension_context = ""
    if config.dimensions and config.dimensions.area:
        dimension_context = f"- Approximate Area: {config.dimensions.area} m². Use it to keep furniture at a realistic scale."

    style = config.style.value
    return f"""You are Podmayak AI, an expert architectural visualization engine using "Image-to-Image" transformation.

CRITICAL INSTRUCTION: PRESERVE THE CAMERA ANGLE AND ROOM GEOMETRY 100%.
Your task is to renovate the EXACT room shown in the input image. You act as a texturing engine, applying materials to the EXISTING surfaces.

STRICT CONSTRAINTS (ZERO TOLERANCE FOR DEVIATION):
1. CAMERA: DO NOT change the camera angle, perspective, or focal length. The output must perfectly align with the input image. If the photo is taken from the side, the output MUST be from the side.
2. GEOMETRY: DO NOT move, remove, or reshape walls, windows, doors, or ceiling beams. The structural shell must be identical.
3. SCALE: DO NOT resize the room. Keep the existing floor area and ceiling height exactly as they are.
4. VIEW: DO NOT hallucinate a different view (e.g., if input is a corner view, do not output a front view).

RENOVATION SPECS:
- Target Room: {config.room_description()}
- Style: {style}
- {color_instruction}
- Flooring: Cover the existing floor surface with {config.flooring.value}.
- Walls: Finish the existing raw walls with paint/wallpaper suitable for {style}.
- Ceiling: Finish the existing ceiling cleanly.
{furniture_instruction}
{dimension_context}

Use the input image as the absolute ground truth for structure. Only change the "skin" (materials) and add furniture within the existing empty space.
Output quality: 8k resolution, photorealistic."""


def build_edit_prompt(instruction: str) -> str:
    """Masked edit: white pixels of the second image are editable, black pixels must stay identical"""
    return f"""TASK: Edit the provided image based on the mask and user instruction.
USER INSTRUCTION: {instruction}

CONSTRAINTS:
1. Only modify the area highlighted by the white pixels in the provided mask image.
2. The rest of the image (black pixels in mask) MUST remain exactly identical.
3. Blend the edits seamlessly with the lighting and perspective of the room.
4. Maintain high photorealism."""


def currency_instruction(country: str) -> str:
    if country == DEFAULT_COUNTRY:
        return "Provide budget estimates in Azerbaijani Manat (AZN)."
    return f"Provide budget estimates in the local currency of {country}."


def dimension_context(config: RenovationConfig) -> str:
    context = ""
    dimensions = config.dimensions
    if dimensions:
        if dimensions.area:
            context += f"Room Area: {dimensions.area} m². "
        if dimensions.width and dimensions.length:
            context += f"Dimensions: {dimensions.width}m x {dimensions.length}m. "
    return context or "Estimate area based on visual cues."


def build_analysis_prompt(config: RenovationConfig) -> str:
    """Budget and materials plan in Azerbaijani, answered as JSON"""
    country = config.country or DEFAULT_COUNTRY
    return f"""Sən Podmayak AI, peşəkar tikinti mühəndisi və interyer dizaynerisən.
Bu iki şəklə bax:
1. "Before" (Podmayak/Təmirsiz).
2. "After" (Dizayn edilmiş).

Context: The renovation is taking place in {country}.
{dimension_context(config)}

Azərbaycan dilində JSON formatında təmir planı hazırla.

YALNIZ bu strukturda JSON qaytar:
{{
  "estimatedBudgetRange": "string (məs: 5,000 - 8,000 AZN)",
  "difficultyLevel": "Asan" | "Orta" | "Çətin",
  "materials": ["string", "string"],
  "furnitureToBuy": ["string", "string"],
  "designTips": ["string", "string"],
  "steps": ["string", "string"]
}}

Tələblər:
- Büdcəni {country} bazar qiymətlərinə uyğun hesabla, sahəni nəzərə al.
- {currency_instruction(country)}
- "After" şəklində istifadə olunan konkret materialları müəyyən et.
- Təmir addımlarını ardıcıllıqla yaz."""


def fallback_analysis() -> RenovationAnalysis:
    """Generic plan returned when neither analysis model produced a usable answer"""
    return RenovationAnalysis(
        estimated_budget_range="Hesablamaq mümkün olmadı",
        difficulty_level="Orta",
        materials=["Boya", "Laminat", "İşıqlandırma"],
        furniture_to_buy=["Şəkildə görünən mebellər"],
        design_tips=["Dəqiq qiymət üçün ustaya müraciət edin."],
        steps=["Otağı təmizləyin", "Elektrik işləri", "Divarlar", "Döşəmə"],
        is_fallback=True,
    )
