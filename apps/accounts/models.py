# Models:
# 1. User - Custom user model (email login, admin/sales roles)


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.core.exceptions import ObjectDoesNotExist
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _



# USER MANAGER (handles user creation)
class UserManager(BaseUserManager):
    """
    Custom user manager for User model

    Provides methods to:
    - Create regular users (sales persons, self-registered accounts)
    - Create superusers (admins)
    - Handle email-based authentication
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user

        Args:
            email (str): User's email address (required)
            password (str): User's password (required)
            **extra_fields: Additional fields (first_name, last_name, role, etc.)

        Returns:
            User: The created user object

        Raises:
            ValueError: If email is not provided

        Example:
            user = User.objects.create_user(
                email='sarah@axisphere.in',
                password='secret123',
                first_name='Sarah',
                last_name='Johnson',
                role='sales'
            )
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        # Emails are compared case-insensitively, store them lower case
        email = self.normalize_email(email).lower()

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)

        # Set password (hashed)
        user.set_password(password)

        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser (admin)

        Superusers have all permissions and can access the Django admin
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', User.ROLE_ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True'))

        return self.create_user(email, password, **extra_fields)



# USER MODEL
class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model for Axisphere CRM

    Features:
    - Email-based authentication (no username)
    - Role-based access (admin, sales)
    - Activity tracking (login count, last login IP)
    """

    ROLE_ADMIN = 'admin'
    ROLE_SALES = 'sales'

    ROLE_CHOICES = [
        (ROLE_ADMIN, _('Administrator')),
        (ROLE_SALES, _('Sales')),
    ]

    # Email as primary identifier (instead of username)
    email = models.EmailField(_('email address'),unique=True,max_length=255,db_index=True,help_text=_('Required. Used for login.'))
    first_name = models.CharField(_('first name'),max_length=50,blank=True)
    last_name = models.CharField(_('last name'),max_length=100,blank=True)

    role = models.CharField(_('role'),max_length=20,choices=ROLE_CHOICES,
                            default=ROLE_SALES,db_index=True,help_text=_('User role: admin (full access) or sales (own leads)'))

    login_count = models.PositiveIntegerField(_('login count'), default=0,help_text=_('Number of times user has logged in'))
    last_login_ip = models.GenericIPAddressField(_('last login IP'), blank=True, null=True,help_text=_('IP address of last login'))
    is_active = models.BooleanField(_('active'), default=True, help_text=_('Inactive users cannot log in. Unselect this instead of deleting accounts.'))
    is_staff = models.BooleanField(_('staff status'), default=False,help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'

    # Fields required when creating superuser (in addition to email and password)
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        db_table = 'users'
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']
        indexes = [
            models.Index(fields=['role', 'is_active'], name='users_role_active_idx'),
        ]

    def __str__(self):
        """
        Example:
            "Sarah Johnson (sarah@axisphere.in)"
        """
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name} ({self.email})"
        return self.email

    # HELPER METHODS
    def get_full_name(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        elif self.first_name:
            return self.first_name
        return self.email

    def get_short_name(self):

        return self.first_name if self.first_name else self.email

    def get_initials(self):
        if self.first_name and self.last_name:
            return f"{self.first_name[0]}{self.last_name[0]}".upper()
        elif self.first_name:
            return self.first_name[0].upper()
        return self.email[0].upper()

    # ROLE CHECKS
    def is_admin(self):

        return self.role == self.ROLE_ADMIN or self.is_superuser

    def is_sales(self):

        return self.role == self.ROLE_SALES

    def get_sales_person(self):
        """Sales person record linked to this login, or None"""
        try:
            return self.sales_person
        except ObjectDoesNotExist:
            return None

    # ACTIVITY TRACKING
    def increment_login_count(self, ip_address=None):
        """
        Increment login count and update last login IP

        Called when user logs in successfully
        """
        self.login_count += 1
        if ip_address:
            self.last_login_ip = ip_address
        self.save(update_fields=['login_count', 'last_login_ip'])
