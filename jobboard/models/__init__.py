from .careers import Job, JobType, Application
