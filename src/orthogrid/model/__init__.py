"""
The MODEL layer contains pure data structures and simulation logic.
It has NO knowledge of the GUI (Qt).
It deals with Geometry, Cubes, the Grid and its Behaviours.
"""
