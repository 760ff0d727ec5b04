# apps/accounts/serializers.py

from django.conf import settings
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from apps.accounts.models import User
from apps.clinics.models import Branch
from core.constants import UserStatus


# -----------------------------
# Branch summary
# -----------------------------
class BranchSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Branch
        fields = ['id', 'code', 'name']


# -----------------------------
# User Serializer
# -----------------------------
class UserSerializer(serializers.ModelSerializer):
    """
    Staff records of the caller's clinic.
    Branch references are only accepted from the same clinic.
    """
    default_branch = serializers.PrimaryKeyRelatedField(
        queryset=Branch.objects.none(), required=False, allow_null=True
    )
    allowed_branches = serializers.PrimaryKeyRelatedField(
        queryset=Branch.objects.none(), many=True, required=False
    )

    class Meta:
        model = User
        fields = [
            'id', 'clinic', 'email', 'full_name', 'phone',
            'role', 'status', 'must_change_password',
            'default_branch', 'allowed_branches',
            'commission_percentage',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'clinic', 'must_change_password', 'created_at', 'updated_at']
        extra_kwargs = {
            # duplicates surface as 409 from the unique index
            'email': {'validators': []},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        tenant = self.context.get('tenant')
        if tenant is not None:
            branches = Branch.objects.filter(clinic_id=tenant.clinic_id)
            self.fields['default_branch'].queryset = branches
            self.fields['allowed_branches'].child_relation.queryset = branches

    def validate_commission_percentage(self, value):
        if value < 0 or value > 100:
            raise serializers.ValidationError("Commission must be between 0 and 100.")
        return value

    def create(self, validated_data):
        allowed = validated_data.pop('allowed_branches', [])
        validated_data.setdefault('status', UserStatus.PENDING)

        user = User.objects.create_user(
            password=settings.DEFAULT_STAFF_PASSWORD,
            must_change_password=True,
            **validated_data,
        )
        if allowed:
            user.allowed_branches.add(*allowed)
        return user


# -----------------------------
# Clinic registration
# -----------------------------
class RegisterClinicSerializer(serializers.Serializer):
    clinic_name = serializers.CharField(max_length=255)
    full_name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)


# -----------------------------
# JWT Login
# -----------------------------
class ClinicTokenObtainSerializer(TokenObtainPairSerializer):
    """
    Email/password login.
    Staff must also present their clinic code; Administrators may omit it.
    """
    clinic_code = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        data = super().validate(attrs)
        user = self.user
        clinic_code = (attrs.get('clinic_code') or '').strip()

        if not user.is_administrator:
            if not clinic_code:
                raise serializers.ValidationError({'clinic_code': 'Clinic code is required for staff login.'})
            if user.clinic is None or user.clinic.code != clinic_code:
                raise AuthenticationFailed('Invalid clinic code for this user.')

        data['require_password_change'] = user.must_change_password
        data['user'] = {
            'id': user.pk,
            'email': user.email,
            'full_name': user.full_name,
            'role': user.role,
        }

        if user.must_change_password:
            return data

        data.update(session_payload(user))
        return data


def session_payload(user):
    """Clinic and branch information a client needs after sign-in."""
    default_branch = user.default_branch
    return {
        'clinic': {
            'id': user.clinic_id,
            'code': user.clinic.code if user.clinic else None,
            'name': user.clinic.name if user.clinic else None,
        },
        'default_branch': BranchSummarySerializer(default_branch).data if default_branch else None,
        'allowed_branches': BranchSummarySerializer(user.allowed_branches.all(), many=True).data,
    }


# -----------------------------
# Change Password
# -----------------------------
class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField(required=True)
    new_password = serializers.CharField(required=True, min_length=8)

    def validate_old_password(self, value):
        if not self.context['request'].user.check_password(value):
            raise AuthenticationFailed('Invalid old password.')
        return value
