"""World generation stages: heightmap, classification, biomes, post-processing, depressions, climate and the pipeline."""