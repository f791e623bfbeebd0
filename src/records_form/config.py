"""Form settings loaded from YAML."""

from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

from records_form.models import PageGeometry
from records_form.resources import AssetNames

ADDRESS_LINES = 3


class SchoolSettings(BaseModel):
    """The issuing school as printed in the letter head."""

    address_lines: list[str] = [
        "โรงเรียนโพนงามพิทยานุกูล",
        "ต. โพนงาม  อ. โกสุมพิสัย",
        "จ.มหาสารคาม 44140",
    ]
    addressee: str = "ผู้อำนวยการโรงเรียนโพนงามพิทยานุกูล"

    @field_validator("address_lines")
    @classmethod
    def _three_lines(cls, value: list[str]) -> list[str]:
        if len(value) > ADDRESS_LINES:
            raise ValueError(f"at most {ADDRESS_LINES} address lines are supported")
        return value + [""] * (ADDRESS_LINES - len(value))


class AssetSettings(BaseModel):
    regular_font: str = AssetNames.regular_font
    bold_font: str = AssetNames.bold_font
    crest_image: str = AssetNames.crest_image
    search_dirs: list[str] = []

    def names(self) -> AssetNames:
        return AssetNames(
            regular_font=self.regular_font,
            bold_font=self.bold_font,
            crest_image=self.crest_image,
        )


class PageSettings(BaseModel):
    """Page size and margins in millimetres (A4 portrait by default)."""

    width: float = 210.0
    height: float = 297.0
    margin_left: float = 18.0
    margin_right: float = 18.0
    margin_top: float = 12.0
    margin_bottom: float = 18.0

    def geometry(self) -> PageGeometry:
        return PageGeometry(
            width=self.width,
            height=self.height,
            left=self.margin_left,
            right=self.margin_right,
            top=self.margin_top,
            bottom=self.margin_bottom,
        )


class FormSettings(BaseModel):
    """Complete rendering configuration."""

    school: SchoolSettings = SchoolSettings()
    assets: AssetSettings = AssetSettings()
    page: PageSettings = PageSettings()


def load_settings(path: Path | None) -> FormSettings:
    """Read settings from a YAML file; ``None`` or an empty file gives the defaults."""
    if path is None:
        return FormSettings()
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return FormSettings(**data)
