# Importing every model module registers the tables on Base.metadata
from models.account import Account, RefreshToken
from models.department import Department
from models.employee import Employee
from models.request import Request, RequestItem
from models.workflow import Workflow
