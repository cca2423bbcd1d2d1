"""
I/O models for API requests and responses.

These schemas are separate from database entities so the API contract can
evolve independently of the tables.

Modules:
- maps: Maps, pin types, pins and distance measurements
- world_map: World map settings, icons and locations
- map_areas: Map areas, region types and map analysis
- wiki: Wiki documents, scraping and assistant chat
- users: Profiles, roles and invitations
"""
