from .care_plan import AssociatedTypeInfo, CarePlanTask, CarePlanTaskRecurrence
from .immunization import Immunization
from .thing_base import ThingBase
from .vitals import BloodGlucose, BloodPressure, BodyDimension, HeartRate, Height, Normalcy, PeakFlow, Weight
