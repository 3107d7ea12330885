"""Weather lookups with a time-bounded cache in front of WeatherAPI.com."""
