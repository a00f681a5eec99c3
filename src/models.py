from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class TagSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    colour: Optional[str] = None            # Black, Navy Blue, ...
    category: Optional[str] = None          # T-Shirt, Half Pant, Set, ...
    company: Optional[str] = None           # Nike, Jockey, ...
    details: str = ""                       # Text left after all matched tokens are removed
    gender: Optional[str] = None            # Male / Female
    age_group: Optional[str] = None         # Baby / Kids / Mens / Ladies / Girl / Boy

    def as_row(self) -> Dict[str, Optional[str]]:
        # Column layout of the tagged sales table
        return {
            "Colour": self.colour,
            "Category": self.category,
            "Company": self.company,
            "Details": self.details,
            "Gender": self.gender,
            "AgeGroup": self.age_group,
        }


class Marker(BaseModel):
    token: str                              # Substring looked up in the description
    gender: Optional[str] = None
    age_group: Optional[str] = None


class CategoryDefault(BaseModel):
    gender: Optional[str] = None
    age_group: Optional[str] = None


class Vocabulary(BaseModel):
    colours: List[str] = Field(default_factory=list)
    gender_markers: List[Marker] = Field(default_factory=list)
    age_markers: List[Marker] = Field(default_factory=list)
    companies: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    aliases: Dict[str, str] = Field(default_factory=dict)   # Spelling variant -> canonical token
