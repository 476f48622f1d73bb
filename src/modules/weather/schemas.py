from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WeatherResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = True
    city: str
    temp: int
    feels_like: int
    condition: str
    description: str
    humidity: int
    wind: float
    icon: str
