"""User-facing error messages."""

TOO_MANY_SLASHES_ERROR = "Too many '/' characters specified in the command."
NO_DATE_SPECIFIED = "NA"

# Dates and times
INVALID_DATE_ERROR = "Invalid date format. Use DD-MM-YYYY."
INVALID_DAY_ERROR = "Day must be between 1 and 31."
INVALID_MONTH_ERROR = "Month must be between 1 and 12."
INVALID_YEAR_ERROR = "Year must be 1967 or later."
INVALID_LEAP_YEAR_ERROR = "29 February only exists in a leap year."
INVALID_CALENDAR_DATE_ERROR = "That day does not exist in the given month."
DATE_IN_FUTURE_ERROR = "Date specified cannot be later than today."
INVALID_TIME_ERROR = "Invalid time format. Use HH:MM."
INVALID_HOURS_ERROR = "Hours must be between 00 and 23."
INVALID_MINUTES_ERROR = "Minutes must be between 00 and 59."

# Run
INSUFFICIENT_RUN_PARAMETERS_ERROR = "Insufficient parameters for run. Use /e:run /d:DISTANCE /t:TIME [/date:DATE]."
INVALID_RUN_TIME_ERROR = "Invalid run time format. Use MM:SS or HH:MM:SS."
INVALID_RUN_MINUTE_ERROR = "Run minutes must be between 1 and 59."
INVALID_RUN_SECOND_ERROR = "Run seconds must be between 1 and 59."
INVALID_RUN_HOUR_ERROR = "Run hours cannot be 0. Use MM:SS instead."
INVALID_RUN_DISTANCE_ERROR = "Distance must be a positive number with 2 decimal places, up to 5000.00 km."

# Gym
INSUFFICIENT_GYM_PARAMETERS_ERROR = "Insufficient parameters for gym. Use /e:gym /n:NUMBER_OF_STATIONS [/date:DATE]."
INVALID_NUMBER_OF_STATIONS_ERROR = "Number of stations must be a positive integer no larger than 50."
EMPTY_EXERCISE_NAME_ERROR = "Exercise name cannot be empty."
INVALID_EXERCISE_NAME_ERROR = "Exercise name can only contain letters, digits and spaces."
EXERCISE_NAME_LENGTH_ERROR = "Exercise name cannot be longer than 25 characters."
INSUFFICIENT_STATION_PARAMETERS_ERROR = "Insufficient parameters for station. Use NAME /s:SETS /r:REPS /w:WEIGHTS."
INVALID_SETS_ERROR = "Number of sets must be a positive integer."
INVALID_REPS_ERROR = "Number of reps must be a positive integer."
INVALID_WEIGHTS_ERROR = "Weights must be comma separated non-negative integers, e.g. 10,20,30."
GYM_WEIGHT_LIMIT_ERROR = "Weight of a set cannot exceed 2000 kg."
GYM_WEIGHTS_INCORRECT_NUMBER_ERROR = "Number of weights must match the number of sets."
MAX_STATIONS_ERROR = "A gym session cannot have more than 50 stations."

# Health
INSUFFICIENT_BMI_PARAMETERS_ERROR = "Insufficient parameters for BMI. Use /h:bmi /height:HEIGHT /weight:WEIGHT /date:DATE."
HEIGHT_WEIGHT_INPUT_ERROR = "Height and weight must be positive numbers with 2 decimal places."
HEIGHT_LIMIT_ERROR = "Height cannot exceed 2.75 metres."
WEIGHT_LIMIT_ERROR = "Weight cannot exceed 640.00 kg."
DUPLICATE_BMI_DATE_ERROR = "A BMI entry already exists for that date."
INSUFFICIENT_APPOINTMENT_PARAMETERS_ERROR = (
    "Insufficient parameters for appointment. Use /h:appointment /date:DATE /time:TIME /description:TEXT."
)
DESCRIPTION_LENGTH_ERROR = "Description cannot be longer than 100 characters."
INVALID_DESCRIPTION_ERROR = "Description can only contain letters, digits, spaces and .,'!?()-"
INSUFFICIENT_PERIOD_PARAMETERS_ERROR = "Insufficient parameters for period. Use /h:period /start:DATE [/end:DATE]."
INVALID_START_DATE_ERROR = "Invalid start date: "
INVALID_END_DATE_ERROR = "Invalid end date: "
START_DATE_IN_FUTURE_ERROR = "Start date cannot be later than today."
END_DATE_IN_FUTURE_ERROR = "End date cannot be later than today."
PERIOD_END_BEFORE_START_ERROR = "End date must be on or after the start date."
PERIOD_START_BEFORE_PREVIOUS_END_ERROR = "Start date must be after the end date of the previous period."
PERIOD_STILL_OPEN_ERROR = "The latest period has no end date yet. Close it with its start date and /end: first."
PERIOD_NOT_LATEST_ERROR = "Only the most recent period can have its end date updated."
PERIOD_ALREADY_OPEN_ERROR = "The latest period already has no end date."
UNABLE_TO_MAKE_PREDICTIONS_ERROR = "At least 3 closed periods are required to make a prediction."
INVALID_HEALTH_TYPE_ERROR = "Invalid health type. Use /h:bmi, /h:period, /h:prediction or /h:appointment."
INVALID_WORKOUT_TYPE_ERROR = "Invalid workout type. Use /e:run or /e:gym."

# Filters and indices
INSUFFICIENT_DELETE_PARAMETERS_ERROR = "Insufficient parameters for delete. Use /item:TYPE /index:INDEX."
INSUFFICIENT_HISTORY_FILTER_ERROR = "Missing filter for history. Use /item:TYPE."
INSUFFICIENT_LATEST_FILTER_ERROR = "Missing filter for latest. Use /item:TYPE."
INVALID_ITEM_ERROR = "Invalid item. Allowed items: "
INVALID_INDEX_ERROR = "Index must be a positive integer."
INDEX_OUT_OF_RANGE_ERROR = "Index is out of range for the selected item."
UNKNOWN_COMMAND_ERROR = "Unknown command. Type 'help' to view the available commands."
EMPTY_NAME_ERROR = "Name cannot be empty."
INVALID_NAME_ERROR = "Name can only contain letters, digits, spaces and .'-"

# Storage
CREATE_FILE_ERROR = "Unable to create the data file."
DATA_INTEGRITY_ERROR = "Data file integrity check failed. The data file has been tampered with and was deleted."
MISSING_INTEGRITY_ERROR = "Data file or hash file is missing. Both files were deleted."
CORRUPT_ERROR = "Data file is corrupted. Both files were deleted."
HASH_ERROR = "Unable to compute the hash of the data file."
SAVE_ERROR = "Unable to save data to the data file."
HASH_WRITE_ERROR = "Unable to write the hash file."
LOAD_GYM_FORMAT_ERROR = "Stored gym entry has an incomplete station."
LOAD_GYM_STATION_COUNT_ERROR = "Stored gym entry has a different number of stations than declared."
LOAD_NUMBER_OF_STATIONS_ERROR = "Stored gym entry has an invalid number of stations."
LOAD_FIELD_COUNT_ERROR = "Stored entry has the wrong number of fields."
LOAD_UNKNOWN_TYPE_ERROR = "Stored entry has an unknown type: "
LOAD_MISSING_NAME_ERROR = "Stored data is missing the user name."
