class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "DATA_RETRIEVED"
    CREATED_SUCCESSFULLY = "CREATED"
    UPDATED_SUCCESSFULLY = "UPDATED"
    DELETED_SUCCESSFULLY = "DELETED"

    # Failure kinds
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    OPERATION_FAILED = "OPERATION_FAILED"
