from . abstract_model import ConstraintModelAbstract, ConstraintData, NoConstraintModel
from . cop_constraint import CoPConstraintModel
from . constraint_model_stack import ConstraintModelStack
