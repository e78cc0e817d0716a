from abc import ABC, abstractmethod

from prrt_planning.core.goals import GoalStates
from prrt_planning.core.log import Logger
from prrt_planning.core.problem_definition import ProblemDefinition
from prrt_planning.geometric.state_space import RealVectorStateSpace
from prrt_planning.local.neighbors import LinearNearestNeighbors, NearestNeighbors
from prrt_planning.planners.prrt import PRRT
from prrt_planning.sampling.state_validity import StateValidityChecker

__all__ = ['AbstractPlanningContext', 'PlanningContext']


class AbstractPlanningContext(ABC):

    @abstractmethod
    def setup(self):
        pass

    @abstractmethod
    def get_logger(self):
        pass

    @abstractmethod
    def get_state_space(self):
        pass

    @abstractmethod
    def get_problem_definition(self):
        pass

    @abstractmethod
    def get_planner(self):
        pass


class PlanningContext(AbstractPlanningContext):
    """
    Builds a logger, state space, problem definition and PRRT planner from a configuration dictionary. Missing sections
    are filled in with defaults and written back into self.config, so the resulting configuration can be dumped and
    reloaded.

    Sections:
        logger: {"handlers": [...], "level": str}
        state_space: {"limits": [[name, [min, max]], ...], "resolution": float}
        problem: {"start_states": [...], "goal_states": [...], "goal_threshold": float}
        planner: {"goal_bias": float, "rho": float, "thread_count": int, "seed": int,
                  "nearest_neighbors": {"model_type": "KDTree" | "BallTree" | "Linear", "rebuild_size": int}}

    Args:
        configuration (dict, optional): The configuration.
        validity_funcs (list, optional): State validity functions, not serializable so passed separately.
        setup (bool, optional): Build everything on construction. Defaults to True.
    """

    def __init__(self, configuration=None, validity_funcs=None, setup=True):
        self.config = configuration if configuration is not None else {}
        self.validity_funcs = validity_funcs
        if setup:
            self.setup()

    def setup(self, planner_overrides=None):
        logger_config = self.config.get("logger", {
            "handlers": ['logging'],
            "level": "info"
        })
        self.config["logger"] = logger_config

        state_space_config = self.config.get("state_space", {
            "limits": [['x', [0, 10]], ['y', [0, 10]]],
            "resolution": .01
        })
        self.config["state_space"] = state_space_config

        problem_config = self.config.get("problem", {
            "start_states": [[0, 0]],
            "goal_states": [[10, 10]],
            "goal_threshold": .1
        })
        self.config["problem"] = problem_config

        planner_config = self.config.get("planner", {
            "goal_bias": .05,
            "rho": .5,
            "thread_count": 2,
            "seed": None,
            "nearest_neighbors": {"model_type": "KDTree", "rebuild_size": 32}
        })
        self.config["planner"] = planner_config
        if planner_overrides is not None:
            for key, value in planner_overrides.items():
                planner_config[key] = value

        self.logger = Logger(name="PRRT", **logger_config)

        svc = StateValidityChecker(validity_funcs=self.validity_funcs) if self.validity_funcs else None
        self.state_space = RealVectorStateSpace([[name, tuple(limit)] for name, limit in state_space_config["limits"]],
                                                state_validity_checker=svc,
                                                resolution=state_space_config.get("resolution", .01))

        self.pdef = ProblemDefinition(self.state_space)
        for start in problem_config.get("start_states", []):
            self.pdef.add_start_state(start)
        goal_states = problem_config.get("goal_states", [])
        if len(goal_states) > 0:
            self.pdef.set_goal(GoalStates(self.state_space, goal_states,
                                          threshold=problem_config.get("goal_threshold", 0.0)))

        self.planner = PRRT(self.state_space, self.pdef,
                            params={key: value for key, value in planner_config.items() if key != "nearest_neighbors"},
                            nearest_neighbors=self._build_nearest_neighbors(planner_config.get("nearest_neighbors", {})),
                            logger=self.logger)
        self.logger.debug("Planning context set up with config {}".format(self.config))

    def _build_nearest_neighbors(self, nn_config):
        model_type = nn_config.get("model_type", "KDTree")
        if model_type == "Linear":
            return LinearNearestNeighbors()
        return NearestNeighbors(model_type=model_type, rebuild_size=nn_config.get("rebuild_size", 32))

    def get_logger(self):
        return self.logger

    def get_state_space(self):
        return self.state_space

    def get_problem_definition(self):
        return self.pdef

    def get_planner(self):
        return self.planner
