"""User-facing response messages."""


class ErrorMessages:
    INVALID_DATA = "Invalid data provided"
    SOMETHING_WRONG = "Something went wrong!"
    UNAUTHORIZED = "You are not allowed to access this route!"

    TOKEN_NOT_FOUND = "Token not Found"
    INVALID_TOKEN = "Invalid token"

    ORGANIZATION_NOT_FOUND = "Organization not found"
    ORGANIZATION_EXISTS = "Organization already exists"
    ORGANIZATION_INVALID_CREDENTIALS = "Invalid credentials"

    USER_NOT_FOUND = "User not found"
    USER_EMAIL_EXISTS = "User already exists with this email"
    USER_INCORRECT_PASSWORD = "Incorrect password"

    PROFILE_NOT_FOUND = "Profile not found"
    PROFILE_EXISTS = "Profile already exists"

    CLIENT_NOT_FOUND = "Client not found"
    CLIENT_EXISTS = "Client already Exist"

    LOCATION_NOT_FOUND = "Location not found"
    LOCATION_EXISTS = "Location already Exist"

    POSITION_NOT_FOUND = "Position not found"
    POSITION_ALREADY_ASSIGNED = "Position already assigned"

    ROLE_NOT_FOUND = "Role not found"
    ROLE_TYPE_EXISTS = "Role type already exists"
    ROLE_ALREADY_ASSIGNED = "Role Already Assigned"

    GEOFENCE_NOT_FOUND = "Geofence not found"

    SHIFT_PATTERN_NOT_FOUND = "Shift pattern not found"

    PAY_RULE_NOT_FOUND = "Pay rule not found"

    NOTE_NOT_FOUND = "Note not found"
    NOTE_EXISTS = "Note already exists"

    INVITATION_NOT_FOUND = "Invitation not found"
    INVITATION_INVALID_EMAILS = "Invalid email format. Use comma to separate email addresses."

    ABSENCE_NOT_FOUND = "Absence not found"
    ABSENCE_EXISTS = "Absence already exist"


class SuccessMessages:
    API_RUNNING = "Api is running"

    ORGANIZATION_CREATE = "Organization created successfully"
    ORGANIZATION_LOGIN = "Organization logged in successfully"
    ORGANIZATION_UPDATE = "Organization updated successfully"
    ORGANIZATION_DELETE = "Organization deleted successfully"
    ORGANIZATION_FOUND = "Organization found"
    ORGANIZATION_ALL_FOUND = "All organizations retrieved successfully"

    USER_SIGN_UP = "User Signed Up Successfully"
    USER_LOGIN = "User Logged In Successfully"
    USER_FOUND = "User found"
    USER_ALL_FOUND = "All Users retrieved successfully"
    USER_UPDATE = "Update user successfully"
    USER_DELETE = "User Deleted Successfully"

    PROFILE_CREATE = "Profile created successfully"
    PROFILE_UPDATE = "Profile updated successfully"
    PROFILE_DELETE = "Profile deleted successfully"
    PROFILE_FOUND = "Profile found"
    PROFILE_ALL_FOUND = "All profiles retrieved successfully"

    CLIENT_CREATE = "Client created successfully"
    CLIENT_UPDATE = "Client updated successfully"
    CLIENT_DELETE = "Client deleted successfully"
    CLIENT_FOUND = "Client found successfully"
    CLIENT_ALL_FOUND = "All clients retrieved successfully"

    LOCATION_CREATE = "Location created successfully"
    LOCATION_UPDATE = "Location updated successfully"
    LOCATION_DELETE = "Location deleted successfully"
    LOCATION_FOUND = "Location found successfully"
    LOCATION_ALL_FOUND = "All locations retrieved successfully"

    POSITION_CREATE = "Position created successfully"
    POSITION_UPDATE = "Position updated successfully"
    POSITION_DELETE = "Position deleted successfully"
    POSITION_FOUND = "Position found"
    POSITION_ALL_FOUND = "All positions retrieved successfully"
    POSITION_ASSIGNED = "Position assigned successfully"

    ROLE_CREATE = "Role created successfully"
    ROLE_UPDATE = "Role updated successfully"
    ROLE_DELETE = "Role deleted successfully"
    ROLE_FOUND = "Role found"
    ROLE_ALL_FOUND = "All roles retrieved successfully"
    ROLE_ASSIGNED = "Role details retrieved successfully"

    GEOFENCE_CREATE = "Geofence created successfully"
    GEOFENCE_UPDATE = "Geofence updated successfully"
    GEOFENCE_DELETE = "Geofence deleted successfully"
    GEOFENCE_FOUND = "Geofence found"
    GEOFENCE_ALL_FOUND = "All geofences retrieved successfully"

    SHIFT_PATTERN_CREATE = "Shift pattern created successfully"
    SHIFT_PATTERN_UPDATE = "Shift pattern updated successfully"
    SHIFT_PATTERN_DELETE = "Shift pattern deleted successfully"
    SHIFT_PATTERN_FOUND = "Shift pattern found"
    SHIFT_PATTERN_ALL_FOUND = "All shift patterns retrieved successfully"

    PAY_RULE_CREATE = "Pay rule created successfully"
    PAY_RULE_UPDATE = "Pay rule updated successfully"
    PAY_RULE_DELETE = "Pay rule deleted successfully"
    PAY_RULE_FOUND = "Pay rule found"
    PAY_RULE_ALL_FOUND = "All pay rules retrieved successfully"

    NOTE_CREATE = "Note Created Successfully"
    NOTE_UPDATE = "Note Edit Successfull"
    NOTE_DELETE = "Note Delete Successfull"
    NOTE_FOUND = "Notes Fetched Successfull"
    NOTE_ALL_FOUND = "Note Getting Successfull"

    INVITATION_SEND = "Invitation sent successfully"
    INVITATION_DELETE = "Invitation deleted successfully"
    INVITATION_FOUND = "Invitation found"
    INVITATION_ALL_FOUND = "All invitations retrieved successfully"

    ABSENCE_CREATE = "Absence created successfully"
    ABSENCE_UPDATE = "Absence updated successfully"
    ABSENCE_DELETE = "Absence deleted successfully"
    ABSENCE_FOUND = "Absence found"
    ABSENCE_ALL_FOUND = "All absences retrieved successfully"
