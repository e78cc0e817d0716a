import matplotlib.pyplot as plt
from matplotlib.collections import PatchCollection, LineCollection
from matplotlib.patches import Rectangle

from prrt_planning.core.log import Logger
from prrt_planning.core.problem_definition import ProblemDefinition
from prrt_planning.geometric.state_space import R2
from prrt_planning.local.neighbors import NearestNeighbors
from prrt_planning.planners import PRRT
from prrt_planning.sampling import StateValidityChecker


BOXES = [[[2, 2], [4, 4]], [[6, 1], [8, 10]]]


def plot_prrt(found_path, graph, approximate):
    fig, ax = plt.subplots()
    edges = [(graph.vs[edge.source]['value'], graph.vs[edge.target]['value']) for edge in graph.es]
    line_segments = LineCollection(
        edges, colors='gray', linestyle='solid', alpha=.5, zorder=1)
    ax.add_collection(line_segments)

    if found_path is not None:
        x, y = zip(*found_path)
        ax.plot(x, y, zorder=2, color='red', linewidth=4, linestyle='--',
                label='Approximate Path' if approximate else 'Path')
        ax.scatter(found_path[0][0], found_path[0][1],
                   color='green', s=150, zorder=3)
        ax.scatter(found_path[-1][0], found_path[-1][1],
                   color='blue', s=150, zorder=3)

    ax.set_xlim([0, 10])
    ax.set_ylim([0, 10])
    patches = [Rectangle(box[0], box[1][0] - box[0][0], box[1][1] - box[0][1]) for box in BOXES]
    ax.add_collection(PatchCollection(patches, alpha=0.4))
    ax.set_title('pRRT')
    ax.legend()
    plt.show()


def box_collision(sample):
    for lower, upper in BOXES:
        if lower[0] <= sample[0] <= upper[0] and lower[1] <= sample[1] <= upper[1]:
            return False
    return True


if __name__ == "__main__":

    #########################
    # State space selection #
    #########################
    svc = StateValidityChecker(col_func=box_collision)
    state_space = R2(state_validity_checker=svc)

    ######################
    # Problem definition #
    ######################
    pdef = ProblemDefinition(state_space)
    pdef.set_start_and_goal_states([1, 1], [9, 9], threshold=.2)

    ###########
    # Planner #
    ###########
    logger = Logger(name="PRRT", handlers=['logging'], level='debug')
    planner = PRRT(state_space, pdef, params={'goal_bias': .05, 'rho': .05, 'thread_count': 4},
                   nearest_neighbors=NearestNeighbors(model_type="KDTree"), logger=logger)
    solved = planner.solve(5.0)

    goal = pdef.get_goal()
    path = goal.get_solution_path()
    logger.info("Solved: {}, approximate: {}, distance to goal: {}".format(solved, goal.is_approximate(), goal.get_difference()))
    if path is not None:
        logger.info("Path of {} states with length {}".format(len(path), path.length()))
    plot_prrt(path.as_list() if path is not None else None, planner.get_planner_graph(), goal.is_approximate())
