"""Built-in API tables: the two base release lines, the deltas, and defaults.

UE4 class bodies use ``GENERATED_UCLASS_BODY()``/``GENERATED_USTRUCT_BODY()``;
UE5 uses ``GENERATED_BODY()`` for both.
"""

from unrealls.knowledge.profiles import ProfileDelta, VersionProfile

CORE_INCLUDE_ROOTS = (
    "Engine/Source/Runtime/Core/Public",
    "Engine/Source/Runtime/CoreUObject/Public",
    "Engine/Source/Runtime/Engine/Public",
)
ENGINE_CLASSES_ROOT = "Engine/Source/Runtime/Engine/Classes"
UMG_ROOT = "Engine/Source/Runtime/UMG/Public"

UE4_MACROS = {
    "UCLASS": (
        "UCLASS(BlueprintType, Blueprintable)\n"
        "class GAME_API AClassName : public AActor\n"
        "{\n"
        "\tGENERATED_UCLASS_BODY()\n"
        "\n"
        "public:\n"
        "\tvirtual void BeginPlay() override;\n"
        "\tvirtual void Tick(float DeltaTime) override;\n"
        "};"
    ),
    "USTRUCT": (
        "USTRUCT(BlueprintType)\n"
        "struct FStructName\n"
        "{\n"
        "\tGENERATED_USTRUCT_BODY()\n"
        "\n"
        "\tUPROPERTY(EditAnywhere, BlueprintReadWrite)\n"
        "\tint32 Value;\n"
        "};"
    ),
    "UFUNCTION": 'UFUNCTION(BlueprintCallable, Category = "Gameplay")\nvoid FunctionName();',
    "UPROPERTY": (
        'UPROPERTY(EditAnywhere, BlueprintReadWrite, Category = "Properties")\n'
        "float PropertyName;"
    ),
}

UE5_MACROS = {
    "UCLASS": (
        "UCLASS(BlueprintType, Blueprintable)\n"
        "class GAME_API AClassName : public AActor\n"
        "{\n"
        "\tGENERATED_BODY()\n"
        "\n"
        "public:\n"
        "\tAClassName();\n"
        "\n"
        "protected:\n"
        "\tvirtual void BeginPlay() override;\n"
        "\n"
        "public:\n"
        "\tvirtual void Tick(float DeltaTime) override;\n"
        "};"
    ),
    "USTRUCT": (
        "USTRUCT(BlueprintType)\n"
        "struct FStructName\n"
        "{\n"
        "\tGENERATED_BODY()\n"
        "\n"
        "\tUPROPERTY(EditAnywhere, BlueprintReadWrite)\n"
        "\tint32 Value = 0;\n"
        "};"
    ),
    "UFUNCTION": 'UFUNCTION(BlueprintCallable, Category = "Gameplay")\nvoid FunctionName();',
    "UPROPERTY": (
        'UPROPERTY(EditAnywhere, BlueprintReadWrite, Category = "Properties")\n'
        "float PropertyName = 0.0f;"
    ),
    "UENUM": (
        "UENUM(BlueprintType)\n"
        "enum class EEnumName : uint8\n"
        "{\n"
        '\tNone UMETA(DisplayName = "None"),\n'
        '\tFirst UMETA(DisplayName = "First"),\n'
        '\tSecond UMETA(DisplayName = "Second")\n'
        "};"
    ),
}

UE4_BASE = VersionProfile.create(
    "4.27",
    classes={
        "AActor": [
            "BeginPlay", "EndPlay", "Tick", "GetActorLocation", "SetActorLocation",
            "GetWorld", "Destroy", "GetComponents", "GetRootComponent",
        ],
        "APawn": [
            "PossessedBy", "UnPossessed", "GetController", "SetupPlayerInputComponent",
            "GetMovementComponent", "AddMovementInput", "AddControllerYawInput",
        ],
        "ACharacter": ["Jump", "StopJumping", "CanJump", "GetCharacterMovement", "LaunchCharacter"],
        "UObject": ["GetName", "GetClass", "IsA", "GetOuter", "GetWorld", "ConditionalBeginDestroy"],
        "UActorComponent": ["BeginPlay", "EndPlay", "TickComponent", "Activate", "Deactivate", "IsActive"],
    },
    macros=UE4_MACROS,
    include_roots=CORE_INCLUDE_ROOTS,
)

UE5_BASE = VersionProfile.create(
    "5.0",
    classes={
        "AActor": [
            "BeginPlay", "EndPlay", "Tick", "GetActorLocation", "SetActorLocation",
            "GetWorld", "GetActorTransform", "SetActorTransform", "Destroy",
            "GetComponents", "GetRootComponent", "FindComponentByClass",
        ],
        "APawn": [
            "PossessedBy", "UnPossessed", "GetController", "SetupPlayerInputComponent",
            "AddMovementInput", "GetMovementComponent", "AddControllerYawInput",
            "AddControllerPitchInput",
        ],
        "ACharacter": [
            "Jump", "StopJumping", "CanJump", "GetCharacterMovement", "LaunchCharacter",
            "Crouch", "UnCrouch", "CanCrouch",
        ],
        "UObject": [
            "GetName", "GetClass", "IsA", "GetOuter", "GetWorld", "GetTypedOuter",
            "ConditionalBeginDestroy", "MarkAsGarbage",
        ],
        "UActorComponent": [
            "BeginPlay", "EndPlay", "TickComponent", "Activate", "Deactivate",
            "IsActive", "RegisterComponent", "UnregisterComponent",
        ],
    },
    macros=UE5_MACROS,
    include_roots=(*CORE_INCLUDE_ROOTS, ENGINE_CLASSES_ROOT),
)

UE5_DELTAS = (
    ProfileDelta("5.1", methods={"AActor": ("GetActorNameOrLabel", "SetActorLabel")}),
    ProfileDelta("5.2", include_roots=(UMG_ROOT,)),
    ProfileDelta("5.3", methods={"AActor": ("GetActorGuid",)}),
    ProfileDelta("5.4"),
    ProfileDelta("5.5"),
)

# Version-independent fallbacks used when a profile lacks an entry
DEFAULT_CLASS_METHODS: dict[str, tuple[str, ...]] = {
    "AActor": ("BeginPlay", "EndPlay", "Tick", "GetActorLocation", "SetActorLocation"),
    "UObject": ("GetName", "GetClass", "IsA"),
    "APawn": ("PossessedBy", "UnPossessed", "GetController"),
    "ACharacter": ("Jump", "StopJumping", "GetCharacterMovement"),
}

DEFAULT_UE4_MACROS = {
    "UCLASS": (
        "UCLASS(BlueprintType, Blueprintable)\n"
        "class GAME_API AClassName : public AActor\n"
        "{\n"
        "\tGENERATED_UCLASS_BODY()\n"
        "\n"
        "};"
    ),
    "USTRUCT": "USTRUCT(BlueprintType)\nstruct FStructName\n{\n\tGENERATED_USTRUCT_BODY()\n};",
}

DEFAULT_UE5_MACROS = {
    "UCLASS": (
        "UCLASS(BlueprintType, Blueprintable)\n"
        "class GAME_API AClassName : public AActor\n"
        "{\n"
        "\tGENERATED_BODY()\n"
        "\n"
        "public:\n"
        "\tAClassName();\n"
        "\n"
        "};"
    ),
    "USTRUCT": "USTRUCT(BlueprintType)\nstruct FStructName\n{\n\tGENERATED_BODY()\n};",
}

DEFAULT_SHARED_MACROS = {
    "UFUNCTION": UE4_MACROS["UFUNCTION"],
    "UPROPERTY": UE4_MACROS["UPROPERTY"],
}
