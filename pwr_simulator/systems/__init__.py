"""
Plant Systems

Primary (reactor core, rods, safety) and secondary (steam cycle) models.
"""
