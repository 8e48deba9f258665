"""
Property correlations of dry air, water vapour, liquid water, ice and humid air.
"""

from hvac_engine.properties import dry_air, water_vapour, liquid_water, ice, humid_air

__all__ = ['dry_air', 'water_vapour', 'liquid_water', 'ice', 'humid_air']
