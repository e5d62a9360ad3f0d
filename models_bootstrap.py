# models_bootstrap.py
from staff import models as _staff_models
from duty_roster import models as _duty_roster_models
from assignment import models as _assignment_models
from rest_record import models as _rest_record_models
