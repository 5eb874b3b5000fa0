"""
Pydantic schemas for the design option catalogue
"""
from typing import List, Optional

from pydantic import BaseModel


class StyleOption(BaseModel):
    id: str
    label: str
    value: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class RoomOption(BaseModel):
    id: str
    label: str
    value: str

    class Config:
        from_attributes = True


class ColorOption(BaseModel):
    id: str
    name: str
    value: str
    bg_class: Optional[str] = None

    class Config:
        from_attributes = True


class FlooringOption(BaseModel):
    id: str
    label: str
    value: str
    color_class: Optional[str] = None

    class Config:
        from_attributes = True


class FurnitureOption(BaseModel):
    id: str
    label: str
    icon: Optional[str] = None
    room_types: List[str]

    class Config:
        from_attributes = True


class PresetOption(BaseModel):
    id: str
    name: str
    style: str
    colors: List[str]
    flooring: str
    icon: Optional[str] = None

    class Config:
        from_attributes = True


class AppContentResponse(BaseModel):
    """Everything the renovator needs to render its option pickers"""

    styles: List[StyleOption]
    rooms: List[RoomOption]
    colors: List[ColorOption]
    flooring: List[FlooringOption]
    furniture: List[FurnitureOption]
    presets: List[PresetOption]
