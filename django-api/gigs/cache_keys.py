def city_fans_key(band_id) -> str:
    return f"bands:{band_id}:city-fans"
