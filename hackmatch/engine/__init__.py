"""Team matchmaking engine.

Sub-modules:
- compatibility – pairwise and team scoring
- combinations  – bounded subset search and parallel evaluation
- diversity     – demographic batches & diversity-maximising grouping
- reasoning     – strengths / concerns / suggestions and role labels
"""
