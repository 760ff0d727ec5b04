# apps/accounts/views.py

import logging

from django.db import transaction
from rest_framework import generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from apps.accounts.models import User
from apps.accounts.serializers import (
    ChangePasswordSerializer,
    ClinicTokenObtainSerializer,
    RegisterClinicSerializer,
    UserSerializer,
    session_payload,
)
from apps.accounts.services import issue_tokens, register_clinic
from apps.audit.services import log_action
from core.constants import AuditActions, UserStatus
from core.mixins.tenant_scoped import TenantScopedViewSetMixin
from core.permissions import IsAdministrator, IsAuthenticatedAndActive
from core.tenancy import scoped_update

logger = logging.getLogger(__name__)


# =========================
# Auth
# =========================

class RegisterClinicView(generics.GenericAPIView):
    """Public sign-up creating a clinic and its first Administrator."""
    serializer_class = RegisterClinicSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        clinic, admin = register_clinic(**serializer.validated_data)
        log_action(
            request,
            action=AuditActions.REGISTER,
            entity="Clinic",
            entity_id=clinic.pk,
            details=f"Registered clinic {clinic.code}",
            user=admin,
        )

        return Response(
            {
                **issue_tokens(admin),
                'user': UserSerializer(admin).data,
                'clinic': {'id': clinic.pk, 'code': clinic.code, 'name': clinic.name},
                'default_branch': None,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(TokenObtainPairView):
    serializer_class = ClinicTokenObtainSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        user_id = response.data.get('user', {}).get('id')
        if user_id is not None:
            log_action(
                request,
                action=AuditActions.LOGIN,
                entity="User",
                entity_id=user_id,
                user=User.objects.get(pk=user_id),
            )
        return response


class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticatedAndActive]

    def put(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.set_password(serializer.validated_data['new_password'])
        user.must_change_password = False
        user.status = UserStatus.ACTIVE
        user.save(update_fields=['password', 'must_change_password', 'status', 'updated_at'])

        log_action(
            request,
            action=AuditActions.PASSWORD_CHANGE,
            entity="User",
            entity_id=user.pk,
        )

        return Response({
            **issue_tokens(user),
            'user': UserSerializer(user).data,
            **session_payload(user),
        })


# =========================
# Staff management
# =========================

class UserViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    """Administrator-only staff management inside the caller's clinic."""
    queryset = User.objects.prefetch_related('allowed_branches')
    serializer_class = UserSerializer
    filterset_fields = ['role', 'status']

    def get_permissions(self):
        permissions = super().get_permissions()
        if self.action != 'me':
            permissions.append(IsAdministrator())
        return permissions

    def perform_create(self, serializer):
        super().perform_create(serializer)
        log_action(
            self.request,
            action=AuditActions.CREATE,
            entity="User",
            entity_id=serializer.instance.pk,
            details=f"Created {serializer.instance.role} {serializer.instance.email}",
        )

    def perform_update(self, serializer):
        changes = dict(serializer.validated_data)
        allowed = changes.pop('allowed_branches', None)
        changes['updated_by'] = self.request.user
        instance = serializer.instance

        with transaction.atomic():
            scoped_update(self.get_queryset(), instance.pk, changes)
            instance.refresh_from_db()

            if allowed is not None:
                instance.allowed_branches.set(allowed)
            if instance.default_branch_id is not None:
                instance.allowed_branches.add(instance.default_branch_id)

        log_action(
            self.request,
            action=AuditActions.UPDATE,
            entity="User",
            entity_id=instance.pk,
        )

    def perform_destroy(self, instance):
        if instance.pk == self.request.user.pk:
            raise ValidationError('You cannot delete your own account.')
        super().perform_destroy(instance)
        log_action(
            self.request,
            action=AuditActions.DELETE,
            entity="User",
            entity_id=instance.pk,
            details=f"Deleted {instance.email}",
        )

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticatedAndActive])
    def me(self, request):
        """Current principal with its clinic and branches."""
        return Response({
            'user': UserSerializer(request.user).data,
            **session_payload(request.user),
        })
