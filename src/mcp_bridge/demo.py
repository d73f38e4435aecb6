"""Sample tools used by ``mcp-bridge serve`` when no target is given."""

from __future__ import annotations

from mcp_bridge.tools.annotation import llm_tool

_TEMPERATURES_F: dict[str, int] = {
    "Danville": 88,
    "Diablo": 85,
    "Fresno": 97,
    "Los Angeles": 79,
    "Needles": 108,
    "Sacramento": 94,
    "San Diego": 72,
    "San Francisco": 64,
}


class CaliforniaWeather:
    """Static weather data for a handful of California cities."""

    def __init__(self, temperatures: dict[str, int] | None = None) -> None:
        """Use ``temperatures`` (degrees Fahrenheit by city) or the built-in table."""
        self.temperatures = dict(temperatures if temperatures is not None else _TEMPERATURES_F)

    @llm_tool("List the California cities with known weather data.")
    def list_cities(self) -> list[str]:
        """Return the known city names in alphabetical order."""
        return sorted(self.temperatures)

    @llm_tool("Return the current temperature of a California city.")
    def temperature(self, city: str, unit: str = "F") -> str:
        """Return the temperature of ``city`` in ``unit`` (``"F"`` or ``"C"``).

        Raises:
            LookupError: if the city is unknown.
        """
        if city not in self.temperatures:
            message = f"no weather data for {city}"
            raise LookupError(message)
        fahrenheit = self.temperatures[city]
        if unit.upper() == "C":
            return f"{round((fahrenheit - 32) * 5 / 9, 1)} C"
        return f"{fahrenheit} F"

    @llm_tool("Return the hottest of the given cities.")
    def hottest_city(self, cities: list[str]) -> str:
        """Return the hottest known city, ignoring names without data."""
        known = [city for city in cities if city in self.temperatures]
        if not known:
            message = "none of the given cities have weather data"
            raise ValueError(message)
        return max(known, key=self.temperatures.__getitem__)
