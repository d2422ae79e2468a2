"""World sculptor editing model: state, layout, tools, simulation, colours and mesh data."""