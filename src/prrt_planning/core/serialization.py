import os
import json
import datetime

import igraph


def dump_planner(context_config, planner, parent_directory_path="./", directory_name=None):
    """
    Dumps the planning configuration, the states of the planner's tree and the tree itself into a new directory.

    The directory holds config.json, states.json, solution.json (if the goal holds a solution path) and graph.graphml.

    Args:
        context_config (dict): Configuration used to build the planner.
        planner (PRRT): The planner.
        parent_directory_path (str, optional): Directory to create the dump directory in.
        directory_name (str, optional): Defaults to the current timestamp.

    Returns:
        str: Path of the created directory.
    """
    now = datetime.datetime.today()
    nTime = now.strftime('%Y-%m-%dT%H-%M-%S') if directory_name is None else directory_name
    directory_path = os.path.join(parent_directory_path, nTime)
    if not os.path.exists(directory_path):
        os.makedirs(directory_path)

    # Dump Planning Configuration
    file_path = os.path.join(directory_path, 'config.json')
    with open(file_path, "w") as file:
        json.dump({"config": context_config}, file)

    # Dump States
    file_path = os.path.join(directory_path, 'states.json')
    with open(file_path, "w") as file:
        json.dump({"states": [[float(val) for val in state] for state in planner.get_states()]}, file)

    # Dump Solution
    goal = planner.pdef.get_goal()
    if goal is not None and goal.get_solution_path() is not None:
        file_path = os.path.join(directory_path, 'solution.json')
        with open(file_path, "w") as file:
            json.dump({
                "path": goal.get_solution_path().as_list(),
                "approximate": goal.is_approximate(),
                "difference": goal.get_difference()
            }, file)

    # Dump Graph as a graph ML
    # GraphML has no list attributes, so only names and edge weights are written.
    graph = planner.get_planner_graph()
    if "value" in graph.vs.attributes():
        del graph.vs["value"]
    graph.write_graphml(os.path.join(directory_path, "graph.graphml"))
    return directory_path


def load_planner(directory_path):
    """
    Loads a directory written by dump_planner().

    Returns:
        dict, list, dict, igraph.Graph: The configuration, the tree states, the solution (None if not dumped) and the
        tree graph.
    """
    file_path = os.path.join(directory_path, 'config.json')
    with open(file_path, "r") as file:
        config = json.load(file)['config']

    file_path = os.path.join(directory_path, 'states.json')
    with open(file_path, "r") as file:
        states = json.load(file)['states']

    solution = None
    file_path = os.path.join(directory_path, 'solution.json')
    if os.path.exists(file_path):
        with open(file_path, "r") as file:
            solution = json.load(file)

    graph = igraph.Graph.Read_GraphML(os.path.join(directory_path, "graph.graphml"))

    return config, states, solution, graph
