from .company import CompanyGroup, CompanyUser, CompanyUserGroupPermission
from .candidate import Candidate, WorkExperience, JobTypeExperience, JobHistory, CareerStatusEntry
from .job_posting import JobPosting
from .scout import ScoutMessage
from .selection_progress import SelectionProgress
from .membership import SavedCandidate, HiddenCandidate
from .search_history import SearchHistory
