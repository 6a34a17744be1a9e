"""
Atlas map visibility – decides which configured maps a viewer may see.
"""
