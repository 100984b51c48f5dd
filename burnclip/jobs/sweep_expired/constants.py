# Job response statuses
SUCCESS = 'success'
ERROR = 'error'
